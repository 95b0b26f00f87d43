"""Terminal output for the specref CLI.

Resolved entities and tables are the command's result and go to **stdout**;
everything else (progress notes, errors, debug lines) goes to **stderr**, so
``specref resolve ... > pet.json`` always produces clean JSON.

The format is chosen once per invocation:

* ``json`` -- indented JSON for documents, an array of row objects for
  tables.
* ``plain`` -- indented JSON for documents, tab-separated rows for tables.
* ``rich`` -- syntax-highlighted JSON and boxed tables.
* ``auto`` -- ``rich`` on an interactive terminal with colour enabled,
  ``plain`` otherwise.

Colour is off when ``--no-color`` is passed, ``NO_COLOR`` is set, or
``TERM=dumb``.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """Values accepted for ``output.format`` and the format flags."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Writes command results to stdout and diagnostics to stderr.

    Args:
        format: Requested format; ``AUTO`` is resolved immediately, so
            :attr:`format` is never ``AUTO``.
        no_color: Disable colour and styling.
        quiet: Drop :meth:`info` and :meth:`success` messages.
        verbose: Show :meth:`debug` messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self.no_color = no_color or _should_disable_color()
        self.quiet = quiet
        self.verbose = verbose
        if format is OutputFormat.AUTO:
            rich = _is_tty() and not self.no_color
            format = OutputFormat.RICH if rich else OutputFormat.PLAIN
        self.format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self.no_color,
            force_terminal=format is OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self.no_color, soft_wrap=True)

    # --- results (stdout) ---

    def print_document(self, data: Any) -> None:
        """Print a JSON-compatible value, highlighted in rich mode."""
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self.format is OutputFormat.RICH:
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))
        else:
            self._write(text)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows under *headers*; *title* is only shown in rich mode."""
        if self.format is OutputFormat.JSON:
            self.print_document([dict(zip(headers, row)) for row in rows])
        elif self.format is OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self._write("\t".join(line))
        else:
            table = Table(title=title, header_style="bold cyan")
            for header in headers:
                table.add_column(header)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    def _write(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    # --- diagnostics (stderr) ---

    def info(self, message: str) -> None:
        if not self.quiet:
            self._diagnose(message)

    def success(self, message: str) -> None:
        if not self.quiet:
            self._diagnose(message, style="green")

    def error(self, message: str) -> None:
        """Report an error. Shown even with ``--quiet``."""
        self._diagnose(f"Error: {message}", style="bold red")

    def debug(self, message: str) -> None:
        if self.verbose:
            self._diagnose(f"[debug] {message}", style="dim")

    def _diagnose(self, text: str, style: Optional[str] = None) -> None:
        if self.no_color:
            print(text, file=sys.stderr, flush=True)
        else:
            # markup off: messages quote pointers and user input verbatim
            self._stderr.print(text, style=style, markup=False, highlight=False)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# --- process-wide instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager so the next call builds a fresh one."""
    global _output
    _output = None


def print_document(data: Any) -> None:
    get_output().print_document(data)


def print_table(
    headers: list[str], rows: list[list[str]], title: Optional[str] = None
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
