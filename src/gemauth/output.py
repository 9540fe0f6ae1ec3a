"""Terminal output for gemauth: data on stdout, diagnostics on stderr.

What a script may want to capture (the resolved host, key tables,
registry response bodies) is written to stdout. Everything addressed to
the person at the terminal (sign-in banners, status lines, errors, next
steps) is written to stderr, so ``gemauth host | xargs ...`` stays clean.

Colour is off for ``--no-color``, ``NO_COLOR`` and ``TERM=dumb``. Rich
formatting is used only when stdout is a terminal.

:func:`~gemauth.app.main_callback` installs one :class:`OutputManager`
per invocation with :func:`set_output`. Commands use the module-level
helpers (:func:`info`, :func:`error`, :func:`print_table`, ...), which
forward to it.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """How data written to stdout is rendered. ``AUTO`` picks RICH or PLAIN."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Route data and diagnostics to the right stream in the right format.

    Args:
        format: Rendering for stdout data. ``AUTO`` becomes ``RICH`` on an
            interactive, coloured terminal and ``PLAIN`` otherwise.
        no_color: Never emit colour or markup.
        quiet: Drop informational stderr lines; errors are still shown.
        verbose: Show :meth:`debug` lines.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        """The stdout rendering after ``AUTO`` has been resolved."""
        return self._format

    # ------------------------------------------------------------------ #
    # stdout
    # ------------------------------------------------------------------ #

    def format_response(self, data: Any, content_type: str = "application/json") -> None:
        """Write a registry response body (decoded JSON or text) to stdout."""
        if self._format == OutputFormat.JSON:
            if isinstance(data, str):
                try:
                    data = json.loads(data)
                except ValueError:
                    self.print_data(data)
                    return
            self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        elif self._format == OutputFormat.PLAIN:
            if isinstance(data, dict):
                lines = [f"{key}\t{value}" for key, value in data.items()]
            elif isinstance(data, list):
                lines = [str(item) for item in data]
            else:
                lines = [str(data)]
            for line in lines:
                self.print_data(line)
        elif isinstance(data, (dict, list)):
            text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))
        elif "json" in content_type:
            self._stdout.print(Syntax(str(data), "json", theme="monokai", word_wrap=True))
        else:
            self._stdout.print(escape(str(data)))

    def print_data(self, text: str) -> None:
        """Write one line to stdout, unformatted."""
        print(text, file=sys.stdout, flush=True)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Write rows to stdout.

        JSON renders a list of ``{header: cell}`` objects, PLAIN renders
        tab-separated lines with a header line, and RICH renders a
        :class:`~rich.table.Table` (the only mode that shows *title*).
        """
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
            return
        if self._format == OutputFormat.PLAIN:
            for row in [headers, *rows]:
                self.print_data("\t".join(row))
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # stderr
    # ------------------------------------------------------------------ #

    def _emit(self, text: str, style: Optional[str] = None, label: str = "") -> None:
        # Message text is escaped: registry bodies may contain "[...]".
        if self._no_color:
            print(f"{label}{text}", file=sys.stderr, flush=True)
            return
        prefix = f"[bold red]{label}[/bold red]" if label else ""
        body = escape(text)
        if style:
            body = f"[{style}]{body}[/{style}]"
        self._stderr.print(f"{prefix}{body}")

    def info(self, message: str) -> None:
        """Status line. Hidden by ``--quiet``."""
        if not self._quiet:
            self._emit(message)

    def success(self, message: str) -> None:
        """Green confirmation line. Hidden by ``--quiet``."""
        if not self._quiet:
            self._emit(message, style="green")

    def error(self, message: str) -> None:
        """``Error:`` line. Always shown, registry text included verbatim."""
        self._emit(message, label="Error: ")

    def suggest(self, message: str) -> None:
        """Dimmed next-step hint such as ``gemauth signin``. Hidden by ``--quiet``."""
        if not self._quiet:
            self._emit(f"→ {message}", style="dim")

    def debug(self, message: str) -> None:
        """Trace line (request method and URL). Only with ``--verbose``."""
        if self._verbose:
            self._emit(f"[debug] {message}", style="dim")


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (to anything) or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Per-invocation instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating an ``AUTO`` one if needed."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests swap ``sys.stdout`` between runs)."""
    global _output
    _output = None


def format_response(data: Any, content_type: str = "application/json") -> None:
    get_output().format_response(data, content_type)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)


def suggest(message: str) -> None:
    get_output().suggest(message)
