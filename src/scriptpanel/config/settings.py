"""scriptpanel configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from scriptpanel.exceptions import ConfigurationError, check_config_keys

SUPPORTED_FORMATS = ("comic", "screenplay", "stage_play", "tv")
FORMAT_ALIASES = {
    "stage": "stage_play",
    "play": "stage_play",
    "teleplay": "tv",
    "television": "tv",
}


def normalize_format_name(name: str) -> str:
    """Lower-case a format name, use underscores and resolve aliases."""
    normalized = "_".join(name.strip().lower().replace("-", " ").split())
    return FORMAT_ALIASES.get(normalized, normalized)


class ScriptPanelSettings(BaseSettings):
    """scriptpanel configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. CLI arguments (when provided via command flags)
       Example: scriptpanel parse script.md --format screenplay

    2. Config file values (YAML, TOML, or JSON)
       Example: scriptpanel parse script.md --config myconfig.yaml

    3. Environment variables (prefixed with SCRIPTPANEL_)
       Example: export SCRIPTPANEL_DEFAULT_FORMAT=stage_play

    4. .env file (in current directory or specified path)

    5. Default values (defined in field declarations below)

    The parser functions themselves never read settings; only the
    ``ScriptParser`` defaults and the CLI do.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRIPTPANEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Parser settings
    default_format: str = Field(
        default="comic",
        description="Script format used when none is given (comic, screenplay, "
        "stage_play, tv)",
    )
    max_script_chars: int = Field(
        default=2_000_000,
        description="Largest script accepted by the parser, in characters",
        gt=0,
    )

    # Debug settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("default_format", mode="before")
    @classmethod
    def normalize_format(cls, v: Any) -> str:
        """Normalize the format name and reject unknown formats."""
        if not isinstance(v, str):
            raise ValueError(
                f"default_format must be a string, got {type(v).__name__}"
            )
        normalized = normalize_format_name(v)
        if normalized not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unknown format '{v}'. Expected one of: {', '.join(SUPPORTED_FORMATS)}"
            )
        return normalized

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and resolve path."""
        if v is None:
            return None
        if isinstance(v, str):
            expanded = os.path.expandvars(v)
            return Path(expanded).expanduser().resolve()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(
            f"Path fields must be string or Path. Got {type(v).__name__}: {v!r}"
        )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> str:
        """Normalize log format to lowercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"log_format must be a string, got {type(v).__name__}")

    @classmethod
    def from_env(cls) -> ScriptPanelSettings:
        """Create settings from environment variables."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> ScriptPanelSettings:
        """Load settings from a configuration file.

        Args:
            config_path: Path to configuration file (YAML, TOML, or JSON).

        Returns:
            Settings loaded from the file.

        Raises:
            ConfigurationError: If file format is not supported.
            FileNotFoundError: If config file doesn't exist.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()

        if suffix in {".yml", ".yaml"}:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
                details={
                    "file": str(config_path),
                    "detected_format": suffix,
                    "supported_formats": [".yml", ".yaml", ".toml", ".json"],
                },
            )

        check_config_keys(data)

        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> ScriptPanelSettings:
        """Load settings with proper precedence from multiple sources.

        Precedence (highest to lowest):
        1. CLI arguments
        2. Config files (last file wins)
        3. Environment variables
        4. Default values

        Args:
            config_files: List of config files to load (later files override earlier).
            cli_args: Dictionary of CLI arguments.

        Returns:
            Merged settings from all sources.
        """
        data: dict[str, Any] = {}

        for config_file in config_files or []:
            file_settings = cls.from_file(config_file)
            # Only keep keys the file actually set so env vars still apply
            data.update(file_settings.model_dump(exclude_unset=True))

        settings = cls(**data)

        if cli_args:
            cli_data = {k: v for k, v in cli_args.items() if v is not None}
            if cli_data:
                updated_data = settings.model_dump()
                updated_data.update(cli_data)
                settings = cls(**updated_data)

        return settings


# Global settings instance
_settings: ScriptPanelSettings | None = None


def _get_config_paths() -> list[Path]:
    """Get existing config files in priority order (later files override)."""
    potential_paths = [
        Path.home() / ".config" / "scriptpanel" / "config.yaml",
        Path.home() / ".config" / "scriptpanel" / "config.toml",
        Path.cwd() / "scriptpanel.yaml",
        Path.cwd() / "scriptpanel.toml",
        Path.cwd() / "scriptpanel.json",
    ]

    existing_paths: list[Path] = []
    for path in potential_paths:
        try:
            if path.is_file():
                existing_paths.append(path)
        except OSError:
            continue
    return existing_paths


def get_settings() -> ScriptPanelSettings:
    """Get the global settings instance.

    Returns:
        Global ScriptPanelSettings instance.
    """
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = ScriptPanelSettings.from_multiple_sources(
                config_files=list(config_paths)
            )
        else:
            _settings = ScriptPanelSettings.from_env()
    return _settings


def set_settings(settings: ScriptPanelSettings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally.
    """
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset the global settings instance.

    Forces recreation of settings on next call to get_settings(),
    useful for tests that modify environment variables.
    """
    global _settings
    _settings = None


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> ScriptPanelSettings:
    """Get settings for CLI commands with consistent precedence.

    Args:
        config_file: Optional specific config file to load. If not provided,
                    uses standard config locations.
        cli_overrides: Dictionary of CLI argument overrides. Only non-None
                      values are applied.

    Returns:
        ScriptPanelSettings instance with all sources merged.

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist.
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        return ScriptPanelSettings.from_multiple_sources(
            config_files=[config_file],
            cli_args=cli_overrides,
        )

    settings = get_settings()
    if cli_overrides:
        filtered_overrides = {k: v for k, v in cli_overrides.items() if v is not None}
        if filtered_overrides:
            data = settings.model_dump()
            data.update(filtered_overrides)
            settings = ScriptPanelSettings(**data)

    return settings
