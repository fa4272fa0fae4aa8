"""Design token catalog.

Extracts design tokens from CSS, SCSS and LESS stylesheets, SVG icon
files and raster images into a single merged catalog.
"""

__version__ = "1.0.0"

from .catalog import (
    build_source_document,
    catalog_from_source_document,
    extract_catalog,
    run_extractors,
)
from .classifier import ClassifiedValue, classify
from .merge import merge_results
from .models import (
    Catalog,
    ExtractorResult,
    HardCodedValue,
    SourceLocation,
    Token,
    TokenFile,
    TokenGroup,
    TokenSourceType,
    ValueKind,
)

__all__ = [
    "__version__",
    # Engine
    "extract_catalog",
    "run_extractors",
    "merge_results",
    "build_source_document",
    "catalog_from_source_document",
    "classify",
    "ClassifiedValue",
    # Models
    "Catalog",
    "ExtractorResult",
    "HardCodedValue",
    "SourceLocation",
    "Token",
    "TokenFile",
    "TokenGroup",
    "TokenSourceType",
    "ValueKind",
]
