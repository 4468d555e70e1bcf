"""Formatter for parse results."""

from __future__ import annotations

import io

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scriptpanel.cli.formatters.base import OutputFormat, OutputFormatter
from scriptpanel.cli.formatters.json_formatter import JsonFormatter
from scriptpanel.parser import ParseResult, summarize

PREVIEW_CHARS = 60


def _preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    text = " ".join(text.split())
    return text if len(text) <= limit else text[: limit - 3] + "..."


class ResultFormatter(OutputFormatter[ParseResult]):
    """Render a ``ParseResult`` as a summary, a panel table or JSON."""

    def format(
        self, data: ParseResult, format_type: OutputFormat = OutputFormat.TEXT
    ) -> str:
        """Format a parse result.

        Args:
            data: The parse result
            format_type: TEXT for a summary, TABLE for one row per panel

        Returns:
            Formatted string
        """
        if format_type == OutputFormat.JSON:
            return JsonFormatter().format(data)
        if format_type == OutputFormat.TABLE:
            return self._format_table(data)
        return escape(summarize(data))

    def _format_table(self, data: ParseResult) -> str:
        """Format every panel as a row of a Rich table."""
        if not data.pages:
            return summarize(data)

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Page", justify="right")
        table.add_column("Panel", justify="right")
        table.add_column("Marker")
        table.add_column("Aspect")
        table.add_column("Characters")
        table.add_column("Description")

        for page in data.pages:
            for panel in page.panels:
                table.add_row(
                    str(page.page_number),
                    str(panel.panel_number),
                    panel.visual_marker,
                    panel.aspect_ratio.value,
                    ", ".join(panel.characters),
                    _preview(panel.description),
                )

        string_io = io.StringIO()
        temp_console = Console(file=string_io, width=120)
        temp_console.print(table)
        return string_io.getvalue()
