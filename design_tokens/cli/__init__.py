"""Command-line host adapter for the design token engine.

Modules:
    output: OutputManager for consistent CLI output with color/quiet support
    errors: Structured error types with recovery suggestions
    main: The ``design-tokens`` click command group
"""

from .errors import (
    CLIError,
    ConfigurationError,
    ErrorCategory,
    OutputWriteError,
    ProjectNotFoundError,
    SourceDocumentError,
    ValidationError,
    handle_exception,
)
from .output import OutputConfig, OutputManager, should_use_color

__all__ = [
    # Output
    "OutputConfig",
    "OutputManager",
    "should_use_color",
    # Errors
    "CLIError",
    "ErrorCategory",
    "ProjectNotFoundError",
    "OutputWriteError",
    "ConfigurationError",
    "SourceDocumentError",
    "ValidationError",
    "handle_exception",
]
