"""Token parsers for stylesheets, SVG icons and raster images.

- stylesheet.py: CSS / SCSS / LESS tokenizer parameterized by dialect
- svg_icons.py: named SVG icon definitions
- images.py: PNG / JPEG / GIF thumbnails
"""

from .base import ParserRegistry, TokenParser, create_registry, get_default_registry
from .images import DEFAULT_IMAGE_EXTENSIONS, ImageParser, parse_images
from .stylesheet import (
    CSS_DIALECT,
    DIALECTS,
    LESS_DIALECT,
    SCSS_DIALECT,
    StylesheetDialect,
    StylesheetTokenizer,
    parse_stylesheets,
)
from .svg_icons import SvgIconParser, parse_svg_icons

__all__ = [
    "TokenParser",
    "ParserRegistry",
    "create_registry",
    "get_default_registry",
    "StylesheetDialect",
    "StylesheetTokenizer",
    "CSS_DIALECT",
    "SCSS_DIALECT",
    "LESS_DIALECT",
    "DIALECTS",
    "parse_stylesheets",
    "SvgIconParser",
    "parse_svg_icons",
    "ImageParser",
    "DEFAULT_IMAGE_EXTENSIONS",
    "parse_images",
]
