"""Errors reported by the ``design-tokens`` command line.

Per-file parse failures stay inside the engine (``design_tokens.errors``).
What reaches this module is caller-level trouble: a project directory that
does not exist, a config file that does not validate, a source document
that cannot be read back or written, or bad command arguments. Each error
carries a hint naming what to fix or run next.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

_ANSI = {
    "label": "\033[91m",
    "hint": "\033[96m",
    "detail": "\033[2m",
    "reset": "\033[0m",
}


class ErrorCategory(Enum):
    """What kind of thing went wrong."""

    CONFIGURATION = "configuration"  # design-tokens.config.json or overrides
    FILE_SYSTEM = "file_system"  # Missing project, unwritable output
    VALIDATION = "validation"  # Bad command arguments
    SOURCE_DOCUMENT = "source_document"  # Unreadable build output
    RUNTIME = "runtime"


def _style(text: str, role: str, use_color: bool) -> str:
    if not use_color:
        return text
    return f"{_ANSI[role]}{text}{_ANSI['reset']}"


def _details(**values: Any) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


@dataclass
class CLIError(Exception):
    """An error with a category, a recovery hint and an exit code."""

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Render an ``Error:`` line, an optional ``Suggestion:`` line and details."""
        lines = [f"{_style('Error:', 'label', use_color)} {self.message}"]
        if self.suggestion:
            lines.append(f"{_style('Suggestion:', 'hint', use_color)} {self.suggestion}")
        lines.extend(
            _style(f"  {key}: {value}", "detail", use_color)
            for key, value in self.details.items()
        )
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format(use_color=False)


class ProjectNotFoundError(CLIError):
    """The PROJECT argument of ``build`` is not a directory."""

    def __init__(self, path: str):
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=f"Project directory not found: {path}",
            suggestion="Pass the directory that holds your stylesheets, icons and images",
            details=_details(path=path),
        )


class OutputWriteError(CLIError):
    """The source document could not be written."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=f"Cannot write source document: {reason}",
            suggestion="Choose a writable location with --output",
            details=_details(path=path),
        )


class ConfigurationError(CLIError):
    """The project config file or an override does not validate."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion
            or "Check the keys and values in design-tokens.config.json",
            details=_details(config_file=config_file),
        )


class SourceDocumentError(CLIError):
    """A built source document cannot be read back."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(
            category=ErrorCategory.SOURCE_DOCUMENT,
            message=message,
            suggestion="Regenerate it with 'design-tokens build <project>'",
            details=_details(path=path),
        )


class ValidationError(CLIError):
    """A command argument is unusable."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message=message,
            suggestion=suggestion or "Run 'design-tokens <command> --help' for usage",
            exit_code=2,
        )


def handle_exception(
    error: Exception,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Turn an exception into the text printed on stderr and an exit code.

    Exceptions that are not CLIErrors are wrapped as RUNTIME errors so they
    render the same way. ``verbose`` appends the active traceback.
    """
    if not isinstance(error, CLIError):
        error = CLIError(
            category=ErrorCategory.RUNTIME,
            message=str(error) or type(error).__name__,
            suggestion=None if verbose else "Re-run with --verbose for a traceback",
        )

    message = error.format(use_color=use_color)
    if verbose:
        message += "\n\nTraceback:\n" + traceback.format_exc()
    return message, error.exit_code
