"""List supported script formats command."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from scriptpanel.cli.formatters import JsonFormatter
from scriptpanel.parser.formats import VOCABULARIES

console = Console()


def formats_command(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v", help="Show the recognizer order of each format"
        ),
    ] = False,
) -> None:
    """List the supported script formats."""
    if json_output:
        data = {
            name: {
                "display_name": vocabulary.display_name,
                "page_unit": vocabulary.page_unit,
                "panel_unit": vocabulary.panel_unit,
                "recognizers": vocabulary.recognizer_names(),
            }
            for name, vocabulary in VOCABULARIES.items()
        }
        print(JsonFormatter().format(data))
        return

    table = Table(title="Script Formats")
    table.add_column("Format", style="cyan")
    table.add_column("Name")
    table.add_column("Units", style="green")
    if verbose:
        table.add_column("Recognizers (in order)", no_wrap=False)

    for name, vocabulary in VOCABULARIES.items():
        row = [
            name,
            vocabulary.display_name,
            f"{vocabulary.page_unit} / {vocabulary.panel_unit}",
        ]
        if verbose:
            row.append(", ".join(vocabulary.recognizer_names()))
        table.add_row(*row)

    console.print(table)
