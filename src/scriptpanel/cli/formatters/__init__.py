"""Output formatters for CLI commands."""

from scriptpanel.cli.formatters.base import OutputFormat, OutputFormatter
from scriptpanel.cli.formatters.diff_formatter import DiffFormatter
from scriptpanel.cli.formatters.json_formatter import JsonFormatter
from scriptpanel.cli.formatters.result_formatter import ResultFormatter

__all__ = [
    "DiffFormatter",
    "JsonFormatter",
    "OutputFormat",
    "OutputFormatter",
    "ResultFormatter",
]
