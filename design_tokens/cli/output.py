"""Terminal output for the ``design-tokens`` commands.

Status lines carry a marker: a colored glyph, or ``[OK]``-style text when
color is off. Catalog listings render as aligned tables. Quiet mode keeps
only errors, the closing summary and lines a command forces through.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, TextIO

import click

# level -> (glyph, color, plain-text marker)
MARKERS = {
    "success": ("✓", "bright_green", "[OK]"),
    "error": ("✗", "bright_red", "[FAIL]"),
    "warning": ("⚠", "bright_yellow", "[WARN]"),
    "info": ("ℹ", "bright_blue", "[INFO]"),
}

MAX_CELL_WIDTH = 60


def should_use_color(
    explicit_flag: bool | None = None,
    stream: TextIO | None = None,
) -> bool:
    """Decide whether to emit ANSI colors.

    An explicit flag wins. Otherwise NO_COLOR (https://no-color.org/, any
    value) turns colors off, FORCE_COLOR turns them on, and colors follow
    whether the stream is a terminal.
    """
    if explicit_flag is not None:
        return explicit_flag
    if "NO_COLOR" in os.environ:
        return False
    if "FORCE_COLOR" in os.environ:
        return True

    target = stream if stream is not None else sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(isatty and isatty())


@dataclass
class OutputConfig:
    """How command output is rendered and where it goes."""

    use_color: bool = True
    quiet: bool = False
    verbose: bool = False
    stream: TextIO = field(default_factory=lambda: sys.stdout)
    err_stream: TextIO = field(default_factory=lambda: sys.stderr)

    @classmethod
    def from_flags(
        cls,
        verbose: bool = False,
        quiet: bool = False,
        no_color: bool = False,
    ) -> OutputConfig:
        """Build from the global ``-v``, ``-q`` and ``--no-color`` options."""
        return cls(
            use_color=should_use_color(False if no_color else None),
            quiet=quiet,
            verbose=verbose,
        )


class OutputManager:
    """Writes status lines, tables and summaries for one command run.

    Example:
        >>> out = OutputManager(OutputConfig(use_color=False))
        >>> out.success("Wrote design-tokens.source.json (2048 bytes)")
        [OK] Wrote design-tokens.source.json (2048 bytes)
    """

    def __init__(self, config: OutputConfig | None = None):
        self.config = config or OutputConfig()

    def _get_symbol(self, level: str) -> str:
        glyph, color, plain = MARKERS.get(level, MARKERS["info"])
        return click.style(glyph, fg=color) if self.config.use_color else plain

    def _style(self, text: str, **style: Any) -> str:
        return click.style(text, **style) if self.config.use_color else text

    def _emit(
        self,
        message: str,
        level: str | None = None,
        err: bool = False,
        force: bool = False,
    ) -> None:
        if self.config.quiet and not (err or force):
            return
        if level is not None:
            message = f"{self._get_symbol(level)} {message}"
        click.echo(
            message,
            file=self.config.err_stream if err else self.config.stream,
            color=self.config.use_color,
        )

    def success(self, message: str, force: bool = False) -> None:
        self._emit(message, "success", force=force)

    def error(self, message: str) -> None:
        """Write to the error stream; shown even in quiet mode."""
        self._emit(message, "error", err=True)

    def warning(self, message: str, force: bool = False) -> None:
        self._emit(message, "warning", force=force)

    def info(self, message: str) -> None:
        self._emit(message, "info")

    def debug(self, message: str) -> None:
        if self.config.verbose:
            self._emit(f"DEBUG: {self._style(message, dim=True)}")

    def header(self, title: str) -> None:
        self._emit(self._style(title, bold=True))
        self._emit("=" * len(title))

    def newline(self) -> None:
        self._emit("")

    def plain(self, message: str, force: bool = False) -> None:
        self._emit(message, force=force)

    def table(self, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
        """Write rows as left-aligned columns under a dim header row.

        Whitespace inside cells is collapsed and cells wider than
        MAX_CELL_WIDTH end in "...".
        """
        if self.config.quiet:
            return

        cells = [[_fit(str(cell)) for cell in row] for row in rows]
        widths = [
            max([len(header)] + [len(row[i]) for row in cells])
            for i, header in enumerate(headers)
        ]

        def line(values: Sequence[str]) -> str:
            return "  ".join(v.ljust(w) for v, w in zip(values, widths, strict=True)).rstrip()

        self._emit(self._style(line(headers), dim=True))
        for row in cells:
            self._emit(line(row))

    def summary(
        self,
        total: int,
        loaded: int = 0,
        skipped: int = 0,
        duration_ms: float | None = None,
    ) -> None:
        """Write the closing ``N total | ...`` line; shown even in quiet mode."""
        parts = [f"{total} total"]
        if loaded:
            parts.append(f"{loaded} loaded")
        if skipped:
            parts.append(f"{skipped} skipped")
        if duration_ms is not None:
            parts.append(
                f"{duration_ms:.0f}ms" if duration_ms < 1000 else f"{duration_ms / 1000:.1f}s"
            )
        self._emit(" | ".join(parts), "warning" if skipped else "success", force=True)


def _fit(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= MAX_CELL_WIDTH:
        return text
    return text[: MAX_CELL_WIDTH - 3] + "..."
