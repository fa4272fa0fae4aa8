"""Configuration loading with project file and environment support."""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..cli.errors import ConfigurationError
from ..token_logging import get_logger
from .models import DesignTokenConfig

logger = get_logger()

PROJECT_CONFIG_FILENAME = "design-tokens.config.json"

# camelCase keys accepted in the project file
PROJECT_FILE_KEYS = {
    "tokenGlob": "token_glob",
    "ignorePatterns": "ignore_patterns",
    "imageExtensions": "image_extensions",
    "requireSentinel": "require_sentinel",
    "maxWorkers": "max_workers",
    "outputFilename": "output_filename",
    "logLevel": "log_level",
    "logFormat": "log_format",
}

ENV_VARS = {
    "token_glob": "DESIGN_TOKEN_GLOB",
    "log_level": "DESIGN_TOKEN_LOG_LEVEL",
}


class ConfigLoader:
    """Configuration loader for one project directory."""

    def __init__(self, project_path: Path | None = None):
        self.project_path = Path(project_path) if project_path else Path.cwd()

    @property
    def config_path(self) -> Path:
        return self.project_path / PROJECT_CONFIG_FILENAME

    def load(self, **overrides: Any) -> DesignTokenConfig:
        """Load configuration from all sources.

        Precedence (highest to lowest):
        1. Explicit overrides (None values are ignored)
        2. Environment variables
        3. Project config (design-tokens.config.json)
        4. Defaults

        Raises:
            ConfigurationError: If the project file is unreadable or any
                merged value fails validation.
        """
        config_dict: dict[str, Any] = {}

        # 1. Project file
        if self.config_path.exists():
            project_settings = self._load_project_file()
            config_dict.update(project_settings)
            logger.debug(
                f"Loaded {len(project_settings)} settings from {self.config_path}"
            )

        # 2. Environment variables
        env_count = 0
        for key, env_var in ENV_VARS.items():
            value = os.environ.get(env_var)
            if value:
                config_dict[key] = value
                env_count += 1
        if env_count > 0:
            logger.debug(f"Applied {env_count} environment variables")

        # 3. Explicit overrides
        explicit = {k: v for k, v in overrides.items() if v is not None}
        config_dict.update(explicit)
        if explicit:
            logger.debug(f"Applied {len(explicit)} explicit overrides")

        try:
            return DesignTokenConfig(**config_dict)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}",
                config_file=str(self.config_path) if self.config_path.exists() else None,
            ) from e

    def _load_project_file(self) -> dict[str, Any]:
        try:
            raw = json.loads(self.config_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Cannot read {PROJECT_CONFIG_FILENAME}: {e}",
                config_file=str(self.config_path),
            ) from e

        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"{PROJECT_CONFIG_FILENAME} must contain a JSON object",
                config_file=str(self.config_path),
            )

        settings = {}
        for key, value in raw.items():
            field_name = PROJECT_FILE_KEYS.get(key)
            if field_name is None and key in PROJECT_FILE_KEYS.values():
                field_name = key
            if field_name is None:
                logger.warning(f"Ignoring unknown config key '{key}' in {self.config_path}")
                continue
            settings[field_name] = value
        return settings


def load_config(project_path: Path | None = None, **overrides: Any) -> DesignTokenConfig:
    """Load configuration for a project directory.

    Args:
        project_path: Project root; defaults to the current directory.
        **overrides: Explicit configuration overrides.

    Returns:
        Validated DesignTokenConfig instance.
    """
    return ConfigLoader(project_path).load(**overrides)
