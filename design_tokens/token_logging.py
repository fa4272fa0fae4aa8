"""Logging for the design token engine and CLI.

Everything logs to the ``design_tokens`` logger. The engine only emits
records (per-file skips at WARNING, batch timings at DEBUG);
``setup_logging`` decides where they go: stderr as text or JSON lines,
plus an optional rotating log file.
"""

import json
import logging
import logging.config
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

LOGGER_NAME = "design_tokens"

TEXT_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s"

# Attributes passed through ``extra=`` that are copied into JSON records
CONTEXT_FIELDS = ("source_file", "source_type", "token_count", "duration_ms")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, carrying extraction context from ``extra=``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        entry.update(
            {name: getattr(record, name) for name in CONTEXT_FIELDS if hasattr(record, name)}
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _console_level(level: str, quiet: bool, verbose: bool) -> str:
    if quiet:
        return "ERROR"
    if verbose:
        return "DEBUG"
    return level.upper()


def setup_logging(
    level: str = "INFO",
    quiet: bool = False,
    verbose: bool = False,
    log_file: Path | None = None,
    log_format: str = "text",
    rotation_count: int = 3,
    max_bytes: int = 10 * 1024 * 1024,
) -> logging.Logger:
    """Configure the ``design_tokens`` logger and return it.

    Args:
        level: Console level when neither ``quiet`` nor ``verbose`` is set.
        quiet: Only errors reach the console; wins over ``verbose``.
        verbose: Debug records reach the console.
        log_file: Also write every record to this rotating file.
        log_format: ``"text"`` or ``"json"``, for console and file alike.
        rotation_count: Rotated files kept next to ``log_file``.
        max_bytes: Size at which ``log_file`` rotates.
    """
    use_json = log_format == "json"
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "level": _console_level(level, quiet, verbose),
            "formatter": "json" if use_json else "text",
        }
    }
    if log_file is not None:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(log_file),
            "maxBytes": max_bytes,
            "backupCount": rotation_count,
            "level": "DEBUG",
            "formatter": "json" if use_json else "file",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {"format": TEXT_FORMAT},
                "file": {"format": FILE_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
                "json": {"()": JSONFormatter},
            },
            "handlers": handlers,
            "loggers": {
                LOGGER_NAME: {
                    "handlers": list(handlers),
                    "level": "DEBUG",
                    "propagate": False,
                }
            },
        }
    )
    return logging.getLogger(LOGGER_NAME)


def get_logger() -> logging.Logger:
    """Return the package logger."""
    return logging.getLogger(LOGGER_NAME)


@contextmanager
def debug_context(logger: logging.Logger | None = None) -> Iterator[logging.Logger]:
    """Temporarily let debug records through a logger and its handlers."""
    target = logger or get_logger()
    saved: list[tuple[Any, int]] = [(target, target.level)]
    saved.extend((handler, handler.level) for handler in target.handlers)
    for item, _ in saved:
        item.setLevel(logging.DEBUG)
    try:
        yield target
    finally:
        for item, previous in saved:
            item.setLevel(previous)
