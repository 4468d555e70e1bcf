"""Compare an edited script against previously imported panels."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptpanel.cli.formatters import DiffFormatter, OutputFormat
from scriptpanel.cli.utils.cli_handler import CLIHandler
from scriptpanel.exceptions import ValidationError
from scriptpanel.parser import compute_panel_diffs

console = Console()


def reparse_command(
    script_path: Annotated[
        Path,
        typer.Argument(
            help="Edited script file",
            exists=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    existing_path: Annotated[
        Path,
        typer.Argument(
            help="JSON list of existing panels (page_number, panel_number, "
            "description)",
            exists=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    script_format: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Script format of the edited script"),
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", help="Output diffs as JSON")
    ] = False,
    changed_only: Annotated[
        bool,
        typer.Option("--changed-only", help="Leave out unchanged panels"),
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
    """Show which panels an edited script adds, removes or modifies.

    Nothing is written; the numbered list lets a caller pick which changes
    to apply.
    """
    handler = CLIHandler(console)
    formatter = DiffFormatter(console)

    try:
        settings = handler.load_settings(config)
        existing = handler.read_json(existing_path)
        if isinstance(existing, dict):
            existing = existing.get("panels", [])
        if not isinstance(existing, list):
            raise ValidationError(
                message="Existing panels must be a JSON list",
                hint='Use a list, or an object with a "panels" list',
                details={"file": str(existing_path)},
            )
        text = script_path.read_text(encoding="utf-8")
        diffs = compute_panel_diffs(
            text,
            existing,
            script_format or settings.default_format,
            include_unchanged=not changed_only,
        )
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    formatter.print(diffs, OutputFormat.JSON if json_output else OutputFormat.TEXT)
