"""Per-file parse errors raised inside the extraction engine.

These never escape an extractor: each parser catches them at the file
boundary, logs a warning and contributes an empty result for that file.
"""

from __future__ import annotations


class TokenParseError(Exception):
    """Base class for failures while parsing a single token source file."""

    def __init__(self, filename: str, message: str):
        self.filename = filename
        self.message = message
        super().__init__(f"{filename}: {message}")


class StylesheetSyntaxError(TokenParseError):
    """Malformed CSS/SCSS/LESS syntax."""

    def __init__(self, filename: str, message: str, line: int = 0, column: int = 0):
        self.line = line
        self.column = column
        location = f" at {line}:{column}" if line else ""
        super().__init__(filename, f"{message}{location}")


class SvgParseError(TokenParseError):
    """SVG markup that could not be parsed into an element tree."""


class ImageDecodeError(TokenParseError):
    """Raster payload that could not be decoded."""
