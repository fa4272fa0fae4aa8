"""Vector icon extractor.

Finds named icon definitions in SVG files and emits one token per icon
whose value is self-contained markup that renders on its own:

- ``<symbol id="...">`` sprite entries are re-wrapped in a standalone
  ``<svg>`` carrying the symbol's viewBox.
- ``<svg>`` elements with an ``id`` or ``data-token-name`` are emitted
  as-is with the SVG namespace attached.

``data-token-name`` takes precedence over ``id`` for the token name.
"""

import copy
import html

from bs4 import BeautifulSoup, Tag

from ..errors import SvgParseError
from ..models import (
    ExtractorResult,
    Token,
    TokenFile,
    TokenGroup,
    TokenSourceType,
    ValueKind,
)
from ..token_logging import get_logger
from .base import TokenParser

logger = get_logger()

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"

# Symbol attributes carried over to the wrapping <svg>
SYMBOL_ATTRIBUTES = ("viewBox", "preserveAspectRatio", "width", "height")


class SvgIconParser(TokenParser):
    """Extracts icon tokens from SVG sprite and icon files."""

    @property
    def source_type(self) -> TokenSourceType:
        return TokenSourceType.SVG

    @property
    def supported_extensions(self) -> list[str]:
        return [".svg"]

    def parse_file(self, token_file: TokenFile) -> ExtractorResult:
        """Parse one SVG file.

        Raises:
            SvgParseError: If the content is not valid UTF-8.
        """
        try:
            markup = token_file.text()
        except UnicodeDecodeError as e:
            raise SvgParseError(token_file.filename, f"not valid UTF-8: {e}") from e

        soup = BeautifulSoup(markup, "xml")

        icons: dict[str, Token] = {}
        for element in soup.find_all(["symbol", "svg"]):
            name = element.get("data-token-name") or element.get("id")
            if not name:
                continue
            serialized = self._serialize_icon(element)
            icons[name] = Token(
                name=name,
                value=serialized,
                original_value=serialized,
                kind=ValueKind.ICON,
                source_file=token_file.filename,
            )

        if not icons:
            logger.debug(f"{token_file.filename}: no named icon definitions")
            return ExtractorResult.empty(self.source_type)

        return ExtractorResult(
            token_groups=[TokenGroup(type=self.source_type, tokens=list(icons.values()))],
            source_type=self.source_type,
        )

    def _serialize_icon(self, element: Tag) -> str:
        """Serialize an icon definition as standalone SVG markup."""
        if element.name == "symbol":
            inner = element.decode_contents()
            attributes = [f'xmlns="{SVG_NAMESPACE}"']
            if "xlink:" in inner:
                attributes.append(f'xmlns:xlink="{XLINK_NAMESPACE}"')
            for attribute in SYMBOL_ATTRIBUTES:
                value = element.get(attribute)
                if value:
                    attributes.append(f'{attribute}="{html.escape(value, quote=True)}"')
            return f"<svg {' '.join(attributes)}>{inner}</svg>"

        icon = copy.copy(element)
        if not icon.get("xmlns"):
            icon["xmlns"] = SVG_NAMESPACE
        if "xlink:" in icon.decode_contents() and not icon.get("xmlns:xlink"):
            icon["xmlns:xlink"] = XLINK_NAMESPACE
        return str(icon)


def parse_svg_icons(files: list[TokenFile]) -> ExtractorResult:
    """Parse SVG files into a single icon token group."""
    return SvgIconParser().parse(files)
