"""Catalog merger.

Combines extractor results into one de-duplicated catalog. Results are
consumed in canonical source-type order (CSS, SCSS, LESS, SVG, IMAGE) and,
within a type, in the order supplied by the caller, so the output depends
only on file order and never on which extractor ran first.
"""

from collections.abc import Sequence

from .models import Catalog, ExtractorResult, Token, TokenGroup, TokenSourceType

KEYFRAMES_SEPARATOR = "\n\n"


def merge_results(results: Sequence[ExtractorResult]) -> Catalog:
    """Merge extractor results into a catalog.

    Tokens are re-keyed by name within each source type; a later token
    replaces an earlier one with the same name but keeps its position.
    Hard-coded values are concatenated without de-duplication and keyframe
    blocks are joined with a blank line.

    Args:
        results: Extractor results in caller-defined stable order.

    Returns:
        Merged Catalog. An empty input yields an empty catalog.
    """
    ordered = sorted(
        enumerate(results), key=lambda item: (item[1].source_type.sort_index, item[0])
    )

    groups: dict[TokenSourceType, dict[str, Token]] = {}
    hard_coded_values = []
    keyframes: list[str] = []

    for _, result in ordered:
        for group in result.token_groups:
            merged = groups.setdefault(group.type, {})
            for token in group.tokens:
                merged[token.name] = token
        hard_coded_values.extend(result.hard_coded_values)
        if result.keyframes:
            keyframes.append(result.keyframes)

    token_groups = [
        TokenGroup(type=source_type, tokens=list(tokens.values()))
        for source_type, tokens in sorted(
            groups.items(), key=lambda item: item[0].sort_index
        )
        if tokens
    ]

    return Catalog(
        token_groups=token_groups,
        hard_coded_values=hard_coded_values,
        keyframes=KEYFRAMES_SEPARATOR.join(keyframes),
    )
