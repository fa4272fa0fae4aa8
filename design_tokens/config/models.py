"""Configuration model for token discovery and extraction."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_TOKEN_GLOB = "**/*.{css,scss,less,svg,png,jpeg,gif}"
DEFAULT_OUTPUT_FILENAME = "design-tokens.source.json"


class DesignTokenConfig(BaseModel):
    """Project configuration model with validation."""

    # Discovery
    token_glob: str = Field(default=DEFAULT_TOKEN_GLOB)
    ignore_patterns: list[str] = Field(
        default_factory=lambda: [
            "**/node_modules/**",
            "**/storybook-static/**",
            "**/*.chunk.*",
        ]
    )
    image_extensions: list[str] = Field(
        default_factory=lambda: [".png", ".jpeg", ".jpg", ".gif"]
    )
    require_sentinel: bool = Field(default=True)  # Skip stylesheets without @tokens

    # Extraction
    max_workers: int = Field(default=4, ge=1, le=64)

    # Output
    output_filename: str = Field(default=DEFAULT_OUTPUT_FILENAME)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="text")

    @field_validator("token_glob", "output_filename")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator("ignore_patterns")
    @classmethod
    def validate_patterns(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            raise ValueError("Patterns must be a list")
        for pattern in v:
            if not isinstance(pattern, str):
                raise ValueError("All patterns must be strings")
        return v

    @field_validator("image_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                raise ValueError("Image extensions cannot be empty")
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return v
