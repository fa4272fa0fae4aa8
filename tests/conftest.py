"""
Shared fixtures for the design token test suite.

Provides test fixtures for:
- In-memory token files for each source dialect
- Raster image payloads synthesized with Pillow
- A temporary project tree for discovery and CLI tests
"""

import io
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from design_tokens.models import TokenFile

CSS_TOKENS = """\
/* @tokens Colors
 * @presenter Color */
:root {
  --color-primary: #FF0000; /* Brand red */
  --color-overlay: rgba(0, 0, 0, 0.5);
  --color-link: var(--color-primary);
}

.button {
  color: #00f;
  padding: 8px 16px;
}

@keyframes spin {
  from { transform: rotate(0deg); }
  to { transform: rotate(360deg); }
}
"""

SCSS_TOKENS = """\
// @tokens Typography
// @presenter FontFamily
$font-family-base: "Inter", sans-serif;
$font-size-body: 16px !default;
$font-family-alias: $font-family-base;

.card {
  // regular comment, not a value
  box-shadow: 0 1px 2px rgba(0, 0, 0, 0.2);
  background-image: url(//cdn.example.com/bg.png);
}
"""

LESS_TOKENS = """\
// @tokens Spacing
@spacing-sm: 4px;
@spacing-md: @spacing-sm;

@keyframes fade {
  from { opacity: 0; }
  to { opacity: 1; }
}
"""

SPRITE_SVG = """\
<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink">
  <symbol id="arrow" viewBox="0 0 24 24"><path d="M0 0L24 12L0 24z"/></symbol>
  <symbol id="close" viewBox="0 0 16 16"><path d="M0 0L16 16"/></symbol>
</svg>
"""


def make_image_bytes(image_format: str = "PNG", size: tuple[int, int] = (4, 3)) -> bytes:
    """Encode a small solid-color image in the given format."""
    buffer = io.BytesIO()
    Image.new("RGB", size, (255, 0, 0)).save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture
def css_file() -> TokenFile:
    return TokenFile("styles/tokens.css", CSS_TOKENS)


@pytest.fixture
def scss_file() -> TokenFile:
    return TokenFile("styles/_typography.scss", SCSS_TOKENS)


@pytest.fixture
def less_file() -> TokenFile:
    return TokenFile("styles/spacing.less", LESS_TOKENS)


@pytest.fixture
def sprite_file() -> TokenFile:
    return TokenFile("icons/sprite.svg", SPRITE_SVG)


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG", (4, 3))


@pytest.fixture
def image_factory() -> Callable[..., bytes]:
    """Factory producing encoded image payloads."""
    return make_image_bytes


@pytest.fixture
def token_project(tmp_path: Path, png_bytes: bytes) -> Path:
    """Create a project tree with every supported source type.

    Includes files that discovery must skip: dependencies, build output,
    webpack chunks and a stylesheet without the @tokens marker.
    """
    project = tmp_path / "project"
    (project / "styles").mkdir(parents=True)
    (project / "icons").mkdir()
    (project / "images").mkdir()
    (project / "node_modules" / "lib").mkdir(parents=True)
    (project / "storybook-static").mkdir()

    (project / "styles" / "tokens.css").write_text(CSS_TOKENS)
    (project / "styles" / "_typography.scss").write_text(SCSS_TOKENS)
    (project / "styles" / "spacing.less").write_text(LESS_TOKENS)
    (project / "styles" / "plain.css").write_text(".plain { color: #123456; }\n")
    (project / "icons" / "sprite.svg").write_text(SPRITE_SVG)
    (project / "images" / "logo.png").write_bytes(png_bytes)

    (project / "node_modules" / "lib" / "vendor.css").write_text(CSS_TOKENS)
    (project / "storybook-static" / "main.css").write_text(CSS_TOKENS)
    (project / "styles" / "app.chunk.css").write_text(CSS_TOKENS)
    (project / "README.md").write_text("# Not a token source\n")

    return project
