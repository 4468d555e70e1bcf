"""scriptpanel CLI commands."""

from __future__ import annotations

from scriptpanel.cli.commands.formats import formats_command
from scriptpanel.cli.commands.parse import parse_command
from scriptpanel.cli.commands.reparse import reparse_command

__all__ = ["formats_command", "parse_command", "reparse_command"]
