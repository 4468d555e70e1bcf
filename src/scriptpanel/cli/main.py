"""Main CLI entry point."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from scriptpanel import __version__
from scriptpanel.cli.commands import formats_command, parse_command, reparse_command
from scriptpanel.cli.formatters import JsonFormatter
from scriptpanel.config import get_logger

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="scriptpanel",
    help="Parse comic scripts, screenplays, stage plays and TV scripts into panels",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="parse")(parse_command)
app.command(name="reparse")(reparse_command)
app.command(name="formats")(formats_command)


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show scriptpanel version."""
    version_info = {
        "name": "scriptpanel",
        "version": __version__,
        "description": "Multi-format script parser",
    }

    if json_output:
        print(JsonFormatter().format(version_info))
    else:
        console.print(f"scriptpanel v{version_info['version']}")


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug", help="Enable debug logging", envvar="SCRIPTPANEL_DEBUG"
        ),
    ] = False,
) -> None:
    """Configure global options."""
    if not (debug or verbose):
        return

    import os

    from scriptpanel.config import configure_logging, get_settings, reset_settings

    os.environ["SCRIPTPANEL_LOG_LEVEL"] = "DEBUG" if debug else "INFO"
    if debug:
        os.environ["SCRIPTPANEL_DEBUG"] = "true"

    # Force reconfiguration of logging
    reset_settings()
    configure_logging(get_settings())

    if debug:
        logger.debug("Debug mode enabled")
    else:
        logger.info("Verbose mode enabled")


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
