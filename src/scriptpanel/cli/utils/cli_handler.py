"""Unified CLI handler for standardized error handling and output."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from scriptpanel.cli.formatters.json_formatter import JsonFormatter
from scriptpanel.config import ScriptPanelSettings, get_logger, get_settings_for_cli
from scriptpanel.exceptions import ScriptPanelError, ValidationError

logger = get_logger(__name__)


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for output
        """
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> None:
        """Handle and display errors consistently.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use

        Raises:
            typer.Exit: Always, with ``exit_code``
        """
        error_msg = error.message if isinstance(error, ScriptPanelError) else str(error)
        logger.error(f"Command failed: {error_msg}", exc_info=error)

        if json_output:
            print(self.json_formatter.format_error_response(error_msg, exit_code))
        else:
            label = "Error"
            if isinstance(error, ValidationError):
                label = "Validation Error"
            self.console.print(f"[red]{label}: {escape(error_msg)}[/red]")
            if isinstance(error, ScriptPanelError) and error.hint:
                self.console.print(f"[yellow]Hint: {escape(error.hint)}[/yellow]")

        raise typer.Exit(exit_code)

    def load_settings(self, config: Path | None = None) -> ScriptPanelSettings:
        """Resolve settings from an optional config file and the environment.

        Args:
            config: Config file passed with ``--config``

        Returns:
            Merged settings
        """
        return get_settings_for_cli(config_file=config)

    def read_json(self, path: Path) -> Any:
        """Load a JSON document from disk.

        Args:
            path: File to read

        Returns:
            Decoded JSON value

        Raises:
            ValidationError: If the file is missing or is not valid JSON
        """
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ValidationError(
                message=f"Cannot read JSON from {path}",
                hint="Pass a JSON list of panels with page_number, panel_number "
                "and description",
                details={"file": str(path), "error": str(e)},
            ) from e
