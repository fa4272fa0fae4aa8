"""Token file discovery and loading.

Discovery sits outside the engine: it turns a project directory into the
deterministic, pre-loaded file list the engine consumes.

Example usage:
    config = load_config(project_root)
    paths = discover_token_files(project_root, config)
    files = load_token_files(paths, config, root=project_root)
"""

import re
from collections.abc import Iterable
from pathlib import Path

import pathspec

from .config.models import DesignTokenConfig
from .models import TokenFile
from .parsers.stylesheet import DIALECTS, SENTINEL
from .token_logging import get_logger

logger = get_logger()

STYLESHEET_EXTENSIONS = frozenset(
    ext for dialect in DIALECTS.values() for ext in dialect.extensions
)

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` groups of a glob into separate patterns.

    ``"**/*.{css,scss}"`` becomes ``["**/*.css", "**/*.scss"]``. Nested groups
    expand innermost first.
    """
    match = _BRACE_RE.search(pattern)
    if match is None:
        return [pattern]

    expanded = []
    for option in match.group(1).split(","):
        candidate = pattern[: match.start()] + option + pattern[match.end() :]
        expanded.extend(expand_braces(candidate))
    return list(dict.fromkeys(expanded))


def build_ignore_spec(patterns: Iterable[str]) -> pathspec.PathSpec | None:
    """Compile gitignore-style ignore patterns, or None when there are none."""
    lines = [p.strip() for p in patterns if p.strip() and not p.strip().startswith("#")]
    if not lines:
        return None
    return pathspec.PathSpec.from_lines(pathspec.patterns.GitWildMatchPattern, lines)


def discover_token_files(project_root: Path, config: DesignTokenConfig) -> list[Path]:
    """Find candidate token source files under a project root.

    Args:
        project_root: Directory to search.
        config: Supplies the glob and ignore patterns.

    Returns:
        Absolute paths, sorted by their project-relative POSIX path and
        de-duplicated.
    """
    root = Path(project_root).resolve()
    ignore_spec = build_ignore_spec(config.ignore_patterns)

    found: dict[str, Path] = {}
    for pattern in expand_braces(config.token_glob):
        for path in root.glob(pattern):
            if not path.is_file():
                continue
            relative = path.relative_to(root).as_posix()
            if ignore_spec is not None and ignore_spec.match_file(relative):
                continue
            found.setdefault(relative, path)

    ordered = [found[key] for key in sorted(found)]
    logger.debug(f"Discovered {len(ordered)} candidate files under {root}")
    return ordered


def load_token_files(
    paths: Iterable[Path],
    config: DesignTokenConfig,
    root: Path | None = None,
) -> list[TokenFile]:
    """Read discovered files into TokenFile objects, keeping their order.

    Raster images are read as bytes, everything else as UTF-8 text.
    Stylesheets without the ``@tokens`` marker are dropped when
    ``config.require_sentinel`` is set. Unreadable files are logged and
    skipped.

    Args:
        paths: Files to load, typically from ``discover_token_files``.
        config: Supplies image extensions and the sentinel pre-filter.
        root: When given, file names are recorded relative to it.

    Returns:
        Loaded files in input order.
    """
    resolved_root = Path(root).resolve() if root is not None else None
    image_extensions = set(config.image_extensions)

    files = []
    for path in paths:
        path = Path(path)
        filename = _display_name(path, resolved_root)
        extension = path.suffix.lower()

        try:
            if extension in image_extensions:
                content: str | bytes = path.read_bytes()
            else:
                content = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {filename}: {e}")
            continue

        if (
            config.require_sentinel
            and extension in STYLESHEET_EXTENSIONS
            and SENTINEL not in content
        ):
            logger.debug(f"Skipping {filename}: no {SENTINEL} marker")
            continue

        files.append(TokenFile(filename=filename, content=content))

    logger.debug(f"Loaded {len(files)} token files")
    return files


def _display_name(path: Path, root: Path | None) -> str:
    if root is None:
        return path.as_posix()
    try:
        return path.resolve().relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
