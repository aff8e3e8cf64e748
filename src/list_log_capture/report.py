"""Render captured log lines as rich panels for terminal review."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from list_log_capture.handler import ListHandler


def render_transcript(lines: Sequence[str], *, title: str = "Captured log") -> Panel:
    """Build a rich Panel listing captured lines in emission order."""

    table = Table("#", "Line", expand=True)
    if not lines:
        table.add_row("-", Text("No log lines captured", style="dim"))
    for index, line in enumerate(lines, start=1):
        # Text() keeps brackets in log lines from being read as rich markup.
        table.add_row(str(index), Text(line))

    return Panel(table, title=title, subtitle=f"{len(lines)} lines")


def print_transcript(handler: ListHandler, console: Console | None = None, *, title: str = "Captured log") -> None:
    """Render and print the lines captured by *handler* to the provided console."""

    output_console = console or Console(force_terminal=False)
    printer = output_console.print
    printer(render_transcript(handler.lines, title=title))
