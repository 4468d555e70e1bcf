"""Custom exception hierarchy for scriptpanel with helpful error messages."""

from __future__ import annotations

from typing import Any


class ScriptPanelError(Exception):
    """Base exception with helpful formatting for all scriptpanel errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(ScriptPanelError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class ParseError(ScriptPanelError):
    """Script parsing errors raised at API boundaries (never from parse_script)."""

    pass


class UnsupportedFormatError(ScriptPanelError):
    """Requested script format has no registered vocabulary."""

    def __init__(self, script_format: str, supported: list[str]) -> None:
        """Initialize unsupported format error.

        Args:
            script_format: The format name that was requested
            supported: Names of the formats that are available
        """
        self.script_format = script_format
        self.supported = supported
        super().__init__(
            message=f"Unsupported script format '{script_format}'",
            hint=f"Use one of: {', '.join(supported)}",
            details={"requested": script_format, "supported": supported},
        )


class ValidationError(ScriptPanelError):
    """Input validation errors with details about what was expected."""

    pass


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "format": "default_format",
        "script_format": "default_format",
        "max_chars": "max_script_chars",
        "level": "log_level",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
