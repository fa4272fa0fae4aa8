"""Data models for design token extraction.

This module defines the structures flowing through the extraction engine:
input files, extracted tokens and their groups, hard-coded value findings,
per-extractor results and the merged catalog.

All models serialize to camelCase JSON so that a catalog written at build
time can be read back by the render path without re-parsing any source.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any


class TokenSourceType(Enum):
    """Source dialects a token group can come from."""

    CSS = "css"
    SCSS = "scss"
    LESS = "less"
    SVG = "svg"
    IMAGE = "image"  # PNG / JPEG / GIF rasters

    @property
    def sort_index(self) -> int:
        """Canonical position used to order merged output."""
        return list(TokenSourceType).index(self)


class ValueKind(Enum):
    """Semantic kind of a token or hard-coded value."""

    COLOR = "color"
    GRADIENT = "gradient"
    FONT_FAMILY = "fontFamily"
    FONT_SIZE = "fontSize"
    SPACING = "spacing"
    SHADOW = "shadow"
    OTHER = "other"
    ICON = "icon"  # SVG icon markup, never produced by the classifier
    IMAGE = "image"  # Raster image reference, never produced by the classifier


@dataclass(frozen=True)
class TokenFile:
    """A source file handed to the engine with its content pre-loaded."""

    filename: str
    content: str | bytes

    @property
    def extension(self) -> str:
        """Lowercased file extension including the dot."""
        return PurePosixPath(self.filename.replace("\\", "/")).suffix.lower()

    @property
    def basename(self) -> str:
        """File name without its directory."""
        return PurePosixPath(self.filename.replace("\\", "/")).name

    def text(self) -> str:
        """Return the content as text.

        Raises:
            UnicodeDecodeError: If byte content is not valid UTF-8.
        """
        if isinstance(self.content, bytes):
            return self.content.decode("utf-8-sig")
        return self.content

    def data(self) -> bytes:
        """Return the content as bytes."""
        if isinstance(self.content, str):
            return self.content.encode("utf-8")
        return self.content


@dataclass(frozen=True)
class SourceLocation:
    """Position of a finding inside a source file (1-based)."""

    filename: str
    line: int
    column: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"filename": self.filename, "line": self.line, "column": self.column}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourceLocation":
        """Create from dictionary."""
        return cls(
            filename=data["filename"],
            line=data.get("line", 0),
            column=data.get("column", 0),
        )

    def __str__(self) -> str:
        """Return file:line:column format for easy navigation."""
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass
class Token:
    """A single named design token.

    ``value`` is the classifier's normalized form, ``original_value`` keeps the
    literal source text. Identity inside a group is ``name``.
    """

    name: str
    value: str
    original_value: str
    kind: ValueKind = ValueKind.OTHER
    category: str | None = None  # Label from "@tokens <label>"
    presenter: str | None = None  # From "@presenter <name>"
    description: str | None = None  # Trailing comment on the declaration line
    is_alias: bool = False
    alias_of: str | None = None
    source_file: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "name": self.name,
            "value": self.value,
            "originalValue": self.original_value,
            "kind": self.kind.value,
            "isAlias": self.is_alias,
        }
        if self.category is not None:
            result["category"] = self.category
        if self.presenter is not None:
            result["presenter"] = self.presenter
        if self.description is not None:
            result["description"] = self.description
        if self.alias_of is not None:
            result["aliasOf"] = self.alias_of
        if self.source_file is not None:
            result["sourceFile"] = self.source_file
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Token":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            value=data["value"],
            original_value=data.get("originalValue", data["value"]),
            kind=ValueKind(data.get("kind", "other")),
            category=data.get("category"),
            presenter=data.get("presenter"),
            description=data.get("description"),
            is_alias=data.get("isAlias", False),
            alias_of=data.get("aliasOf"),
            source_file=data.get("sourceFile"),
            metadata=dict(data.get("metadata", {})),
        )


@dataclass
class TokenGroup:
    """All tokens of one source type, in first-seen order."""

    type: TokenSourceType
    tokens: list[Token] = field(default_factory=list)

    def get(self, name: str) -> Token | None:
        """Return the token with the given name, if present."""
        for token in self.tokens:
            if token.name == name:
                return token
        return None

    def names(self) -> list[str]:
        """Token names in group order."""
        return [token.name for token in self.tokens]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": self.type.value,
            "tokens": [token.to_dict() for token in self.tokens],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenGroup":
        """Create from dictionary."""
        return cls(
            type=TokenSourceType(data["type"]),
            tokens=[Token.from_dict(t) for t in data.get("tokens", [])],
        )


@dataclass
class HardCodedValue:
    """A design-relevant literal used outside any token declaration."""

    value: str
    kind: ValueKind
    location: SourceLocation
    property_name: str | None = None
    selector: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "value": self.value,
            "kind": self.kind.value,
            "location": self.location.to_dict(),
            "property": self.property_name,
            "selector": self.selector,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HardCodedValue":
        """Create from dictionary."""
        return cls(
            value=data["value"],
            kind=ValueKind(data["kind"]),
            location=SourceLocation.from_dict(data["location"]),
            property_name=data.get("property"),
            selector=data.get("selector", ""),
        )


@dataclass
class Catalog:
    """Merged, de-duplicated output of the extraction engine."""

    token_groups: list[TokenGroup] = field(default_factory=list)
    hard_coded_values: list[HardCodedValue] = field(default_factory=list)
    keyframes: str = ""

    def get_group(self, source_type: TokenSourceType) -> TokenGroup | None:
        """Return the group for a source type, if any tokens were found."""
        for group in self.token_groups:
            if group.type == source_type:
                return group
        return None

    @property
    def total_tokens(self) -> int:
        """Total number of tokens across all groups."""
        return sum(len(group.tokens) for group in self.token_groups)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "tokenGroups": [group.to_dict() for group in self.token_groups],
            "hardCodedValues": [hcv.to_dict() for hcv in self.hard_coded_values],
            "keyframes": self.keyframes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Catalog":
        """Create from dictionary."""
        return cls(
            token_groups=[TokenGroup.from_dict(g) for g in data.get("tokenGroups", [])],
            hard_coded_values=[
                HardCodedValue.from_dict(h) for h in data.get("hardCodedValues", [])
            ],
            keyframes=data.get("keyframes", ""),
        )


@dataclass
class ExtractorResult(Catalog):
    """Output of one extractor run, tagged with the source type it parsed.

    Shares the catalog shape so that every extractor can be merged
    uniformly and an empty input yields an empty, well-formed result.
    """

    source_type: TokenSourceType = TokenSourceType.CSS

    @classmethod
    def empty(cls, source_type: TokenSourceType) -> "ExtractorResult":
        """Create a result with no groups, findings or keyframes."""
        return cls(source_type=source_type)

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], source_type: TokenSourceType | None = None
    ) -> "ExtractorResult":
        """Create from dictionary.

        An explicit ``source_type`` wins (the build document keys results
        by type); otherwise ``sourceType`` is read from the data.
        """
        catalog = Catalog.from_dict(data)
        resolved = source_type or TokenSourceType(data.get("sourceType", "css"))
        return cls(
            token_groups=catalog.token_groups,
            hard_coded_values=catalog.hard_coded_values,
            keyframes=catalog.keyframes,
            source_type=resolved,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = super().to_dict()
        result["sourceType"] = self.source_type.value
        return result
