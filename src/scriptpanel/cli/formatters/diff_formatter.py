"""Formatter for re-parse panel diffs."""

from __future__ import annotations

from rich.markup import escape

from scriptpanel.cli.formatters.base import OutputFormat, OutputFormatter
from scriptpanel.cli.formatters.json_formatter import JsonFormatter
from scriptpanel.parser import DiffType, PanelDiff

_STYLES = {
    DiffType.ADDED: "green",
    DiffType.REMOVED: "red",
    DiffType.MODIFIED: "yellow",
    DiffType.UNCHANGED: "dim",
}


class DiffFormatter(OutputFormatter[list[PanelDiff]]):
    """Render panel diffs one per line, prefixed with their selection index."""

    def format(
        self, data: list[PanelDiff], format_type: OutputFormat = OutputFormat.TEXT
    ) -> str:
        """Format a list of diffs.

        Args:
            data: Diffs in the order returned by ``compute_panel_diffs``
            format_type: TEXT (Rich markup) or JSON

        Returns:
            Formatted string
        """
        if format_type == OutputFormat.JSON:
            return JsonFormatter().format(data)
        if not data:
            return "No panel changes"

        lines = []
        for index, diff in enumerate(data):
            style = _STYLES[diff.type]
            location = f"page {diff.page_number}, panel {diff.panel_number}"
            line = f"[{style}]\\[{index}] {diff.type.value:<9} {location}[/{style}]"
            if diff.type is DiffType.MODIFIED and diff.before and diff.after:
                line += f"\n      - {escape(diff.before.description)}"
                line += f"\n      + {escape(diff.after.description)}"
            elif diff.type is DiffType.ADDED and diff.after:
                line += f"\n      + {escape(diff.after.description)}"
            elif diff.type is DiffType.REMOVED and diff.before:
                line += f"\n      - {escape(diff.before.description)}"
            lines.append(line)

        counts = {
            kind.value: sum(diff.type is kind for diff in data) for kind in DiffType
        }
        lines.append(", ".join(f"{count} {kind}" for kind, count in counts.items()))
        return "\n".join(lines)
