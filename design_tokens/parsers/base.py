"""Base class and registry for token parsers.

Each parser turns the files of one source type into an ExtractorResult.
Failures are isolated per file: a file that cannot be parsed is logged
and contributes nothing, the rest of the batch is unaffected.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from ..errors import TokenParseError
from ..merge import merge_results
from ..models import ExtractorResult, TokenFile, TokenSourceType
from ..token_logging import get_logger

logger = get_logger()


class TokenParser(ABC):
    """Abstract base class for token parsers.

    Subclasses implement ``parse_file`` for a single file and may raise
    TokenParseError on malformed input; ``parse`` handles batching,
    isolation and merging.
    """

    @property
    @abstractmethod
    def source_type(self) -> TokenSourceType:
        """Source type of the token group this parser produces."""
        ...

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """File extensions this parser can handle (lowercase, with dot)."""
        ...

    def can_handle(self, filename: str) -> bool:
        """Check if this parser can handle the given file name."""
        return TokenFile(filename, b"").extension in self.supported_extensions

    @abstractmethod
    def parse_file(self, token_file: TokenFile) -> ExtractorResult:
        """Parse a single file.

        Args:
            token_file: File with pre-loaded content.

        Returns:
            ExtractorResult for this file alone.

        Raises:
            TokenParseError: If the file is malformed.
        """
        ...

    def safe_parse_file(self, token_file: TokenFile) -> ExtractorResult:
        """Parse a single file, converting any failure into an empty result."""
        context = {"source_file": token_file.filename, "source_type": self.source_type.value}
        try:
            return self.parse_file(token_file)
        except TokenParseError as e:
            logger.warning(f"Skipping {token_file.filename}: {e.message}", extra=context)
        except Exception as e:
            logger.warning(
                f"Unexpected error parsing {token_file.filename}: {e}",
                exc_info=True,
                extra=context,
            )
        return ExtractorResult.empty(self.source_type)

    def parse(self, files: Iterable[TokenFile]) -> ExtractorResult:
        """Parse all handled files and merge them in input order.

        Args:
            files: Files to parse; files with other extensions are ignored.

        Returns:
            Merged ExtractorResult for this parser's source type.
        """
        results = [
            self.safe_parse_file(token_file)
            for token_file in files
            if self.can_handle(token_file.filename)
        ]
        return self.combine(results)

    def combine(self, results: Sequence[ExtractorResult]) -> ExtractorResult:
        """Merge per-file results of this parser, keeping their order."""
        merged = merge_results(results)
        return ExtractorResult(
            token_groups=merged.token_groups,
            hard_coded_values=merged.hard_coded_values,
            keyframes=merged.keyframes,
            source_type=self.source_type,
        )


class ParserRegistry:
    """Registry for token parsers.

    Routes each file to the first registered parser that handles its
    extension.
    """

    def __init__(self) -> None:
        self._parsers: list[TokenParser] = []

    def register(self, parser: TokenParser) -> None:
        """Register a token parser."""
        self._parsers.append(parser)

    @property
    def parsers(self) -> list[TokenParser]:
        """Registered parsers in registration order."""
        return list(self._parsers)

    def get_parser(self, filename: str) -> TokenParser | None:
        """Get a parser that can handle the given file.

        Returns:
            A parser that can handle the file, or None if no parser matches.
        """
        for parser in self._parsers:
            if parser.can_handle(filename):
                return parser
        return None


def create_registry(
    image_extensions: Sequence[str] | None = None,
) -> ParserRegistry:
    """Create a registry with every built-in parser.

    Args:
        image_extensions: Raster extensions to accept; defaults to the
            image parser's built-in set.

    Returns:
        ParserRegistry with CSS, SCSS, LESS, SVG and image parsers.
    """
    from .images import ImageParser
    from .stylesheet import CSS_DIALECT, LESS_DIALECT, SCSS_DIALECT, StylesheetTokenizer
    from .svg_icons import SvgIconParser

    registry = ParserRegistry()
    registry.register(StylesheetTokenizer(CSS_DIALECT))
    registry.register(StylesheetTokenizer(SCSS_DIALECT))
    registry.register(StylesheetTokenizer(LESS_DIALECT))
    registry.register(SvgIconParser())
    if image_extensions is None:
        registry.register(ImageParser())
    else:
        registry.register(ImageParser(image_extensions))
    return registry


# Global registry instance
_default_registry: ParserRegistry | None = None


def get_default_registry() -> ParserRegistry:
    """Get the default parser registry with all built-in parsers."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_registry()
    return _default_registry
