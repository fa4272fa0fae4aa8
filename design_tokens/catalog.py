"""Design token extraction engine.

The engine is a pure function from pre-loaded files to a catalog. It is
used identically by the build-time aggregation step (which writes a JSON
source document) and by the render step (which reads that document back
without re-parsing).

Per-file parses are independent and may run on a thread pool; results are
always joined in input order, never completion order, before merging.
"""

import json
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from .merge import merge_results
from .models import Catalog, ExtractorResult, TokenFile, TokenSourceType
from .parsers.base import ParserRegistry, TokenParser, get_default_registry
from .token_logging import get_logger

logger = get_logger()

# Keys of the build-time source document, one per extractor
SOURCE_DOCUMENT_KEYS = {
    TokenSourceType.CSS: "cssTokens",
    TokenSourceType.SCSS: "scssTokens",
    TokenSourceType.LESS: "lessTokens",
    TokenSourceType.SVG: "svgTokens",
    TokenSourceType.IMAGE: "imageTokens",
}


def run_extractors(
    files: Sequence[TokenFile],
    registry: ParserRegistry | None = None,
    max_workers: int = 1,
) -> list[ExtractorResult]:
    """Route every file to its parser and return one result per parser.

    Args:
        files: Files in a deterministic order (typically sorted paths).
        registry: Parser registry; defaults to all built-in parsers.
        max_workers: Thread pool size for per-file parsing; 1 parses inline.

    Returns:
        One ExtractorResult per registered parser, in registration order.
    """
    registry = registry or get_default_registry()
    start = time.time()

    routed: list[tuple[TokenParser, TokenFile]] = []
    for token_file in files:
        parser = registry.get_parser(token_file.filename)
        if parser is None:
            logger.debug(f"No parser for {token_file.filename}, skipping")
            continue
        routed.append((parser, token_file))

    if max_workers > 1 and len(routed) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(parser.safe_parse_file, token_file)
                for parser, token_file in routed
            ]
            per_file = [future.result() for future in futures]
    else:
        per_file = [parser.safe_parse_file(token_file) for parser, token_file in routed]

    results = []
    for parser in registry.parsers:
        own = [
            result
            for (routed_parser, _), result in zip(routed, per_file, strict=True)
            if routed_parser is parser
        ]
        results.append(parser.combine(own))

    logger.debug(
        f"Extracted tokens from {len(routed)} files in {time.time() - start:.3f}s",
        extra={
            "duration_ms": round((time.time() - start) * 1000, 1),
            "token_count": sum(len(g.tokens) for r in results for g in r.token_groups),
        },
    )
    return results


def extract_catalog(
    files: Sequence[TokenFile],
    registry: ParserRegistry | None = None,
    max_workers: int = 1,
) -> Catalog:
    """Extract a merged catalog from a list of files.

    An empty file list yields an empty catalog.
    """
    return merge_results(run_extractors(files, registry, max_workers))


def build_source_document(
    files: Sequence[TokenFile],
    registry: ParserRegistry | None = None,
    max_workers: int = 1,
) -> dict[str, Any]:
    """Build the whole-project document keyed by source type.

    Returns:
        Dict with ``cssTokens``, ``scssTokens``, ``lessTokens``,
        ``svgTokens`` and ``imageTokens``, each one extractor's result.
    """
    document: dict[str, Any] = {key: ExtractorResult.empty(t).to_dict()
                                for t, key in SOURCE_DOCUMENT_KEYS.items()}
    for result in run_extractors(files, registry, max_workers):
        document[SOURCE_DOCUMENT_KEYS[result.source_type]] = result.to_dict()
    return document


def catalog_from_source_document(document: dict[str, Any]) -> Catalog:
    """Merge a previously built source document into a catalog.

    Unknown keys are ignored; missing keys count as empty results.
    """
    results = [
        ExtractorResult.from_dict(document[key], source_type)
        for source_type, key in SOURCE_DOCUMENT_KEYS.items()
        if isinstance(document.get(key), dict)
    ]
    return merge_results(results)


def write_source_document(document: dict[str, Any], output_path: Path) -> int:
    """Write a source document as JSON.

    Returns:
        Number of bytes written.
    """
    serialized = json.dumps(document, ensure_ascii=False)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(serialized, encoding="utf-8")
    logger.info(f"Wrote token source document to {output_path}")
    return len(serialized.encode("utf-8"))


def load_source_document(path: Path) -> dict[str, Any]:
    """Load a source document written by ``write_source_document``.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not a JSON object.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return data
