"""Configuration for design token discovery and extraction."""

from .config_loader import PROJECT_CONFIG_FILENAME, ConfigLoader, load_config
from .models import DEFAULT_OUTPUT_FILENAME, DEFAULT_TOKEN_GLOB, DesignTokenConfig

__all__ = [
    "DesignTokenConfig",
    "ConfigLoader",
    "load_config",
    "PROJECT_CONFIG_FILENAME",
    "DEFAULT_TOKEN_GLOB",
    "DEFAULT_OUTPUT_FILENAME",
]
