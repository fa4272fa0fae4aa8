"""Raster image extractor.

Emits one token per PNG/JPEG/GIF file. The token value is a base64
``data:`` URI of the untouched payload so a consumer can render a
thumbnail; dimensions and format are recorded as metadata.
"""

import base64
import io
from collections.abc import Sequence

from PIL import Image, UnidentifiedImageError

from ..errors import ImageDecodeError
from ..models import (
    ExtractorResult,
    Token,
    TokenFile,
    TokenGroup,
    TokenSourceType,
    ValueKind,
)
from .base import TokenParser

DEFAULT_IMAGE_EXTENSIONS = (".png", ".jpeg", ".jpg", ".gif")


class ImageParser(TokenParser):
    """Extracts image tokens from raster files."""

    def __init__(self, extensions: Sequence[str] = DEFAULT_IMAGE_EXTENSIONS):
        self._extensions = [
            ext.lower() if ext.startswith(".") else f".{ext.lower()}"
            for ext in extensions
        ]

    @property
    def source_type(self) -> TokenSourceType:
        return TokenSourceType.IMAGE

    @property
    def supported_extensions(self) -> list[str]:
        return list(self._extensions)

    def parse_file(self, token_file: TokenFile) -> ExtractorResult:
        """Read one raster image.

        Raises:
            ImageDecodeError: If the payload is not a decodable image.
        """
        payload = token_file.data()
        try:
            with Image.open(io.BytesIO(payload)) as image:
                width, height = image.size
                image_format = image.format or ""
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
            raise ImageDecodeError(token_file.filename, f"cannot decode image: {e}") from e

        mime_type = Image.MIME.get(image_format.upper(), "application/octet-stream")
        encoded = base64.b64encode(payload).decode("ascii")
        data_uri = f"data:{mime_type};base64,{encoded}"

        token = Token(
            name=token_file.basename,
            value=data_uri,
            original_value=data_uri,
            kind=ValueKind.IMAGE,
            source_file=token_file.filename,
            metadata={
                "width": width,
                "height": height,
                "format": image_format,
                "mime_type": mime_type,
                "size_bytes": len(payload),
            },
        )
        return ExtractorResult(
            token_groups=[TokenGroup(type=self.source_type, tokens=[token])],
            source_type=self.source_type,
        )


def parse_images(
    files: list[TokenFile], extensions: Sequence[str] = DEFAULT_IMAGE_EXTENSIONS
) -> ExtractorResult:
    """Parse raster image files into a single image token group."""
    return ImageParser(extensions).parse(files)
