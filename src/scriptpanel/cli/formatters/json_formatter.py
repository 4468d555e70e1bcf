"""JSON output formatter for CLI."""

from __future__ import annotations

import json
from typing import Any

from scriptpanel.cli.formatters.base import OutputFormat, OutputFormatter


class JsonFormatter(OutputFormatter[Any]):
    """Generic JSON formatter for CLI output."""

    def format(
        self,
        data: Any,
        format_type: OutputFormat = OutputFormat.JSON,  # noqa: ARG002
    ) -> str:
        """Format data as JSON.

        Args:
            data: Data to format
            format_type: Output format type (ignored, always JSON)

        Returns:
            JSON string
        """
        if hasattr(data, "to_dict"):
            # Parser dataclasses
            return json.dumps(data.to_dict(), default=str, indent=2)
        if isinstance(data, list | tuple):
            items = [
                item.to_dict() if hasattr(item, "to_dict") else item for item in data
            ]
            return json.dumps(items, default=str, indent=2)
        if isinstance(data, dict):
            return json.dumps(data, default=str, indent=2)
        return json.dumps({"value": data}, default=str, indent=2)

    def format_error_response(self, error: str | Exception, code: int = 1) -> str:
        """Format an error response.

        Args:
            error: Error message or exception
            code: Error code

        Returns:
            JSON string
        """
        error_msg = str(error) if isinstance(error, Exception) else error
        response = {"success": False, "error": error_msg, "code": code}
        return json.dumps(response, indent=2)
