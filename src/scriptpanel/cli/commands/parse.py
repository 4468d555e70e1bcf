"""Parse a script file command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptpanel.cli.formatters import OutputFormat, ResultFormatter
from scriptpanel.cli.utils.cli_handler import CLIHandler
from scriptpanel.parser import ScriptParser

console = Console()


def parse_command(
    script_path: Annotated[
        Path,
        typer.Argument(
            help="Script file to parse",
            exists=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    script_format: Annotated[
        str | None,
        typer.Option(
            "--format",
            "-f",
            help="Script format: comic, screenplay, stage_play or tv "
            "(default from configuration)",
        ),
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", help="Output the full result as JSON")
    ] = False,
    panels: Annotated[
        bool, typer.Option("--panels", help="Show a table with one row per panel")
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (YAML, TOML, or JSON)",
        ),
    ] = None,
) -> None:
    """Parse a script and print a summary of its structure.

    Exits with status 1 when no page or scene structure could be found.
    """
    handler = CLIHandler(console)
    formatter = ResultFormatter(console)

    try:
        settings = handler.load_settings(config)
        result = ScriptParser(settings).parse_file(script_path, script_format)
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    if json_output:
        formatter.print(result, OutputFormat.JSON)
    elif panels:
        formatter.print(result, OutputFormat.TABLE)
    else:
        formatter.print(result, OutputFormat.TEXT)

    if not result.success:
        raise typer.Exit(1)
