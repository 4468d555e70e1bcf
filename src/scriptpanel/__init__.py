"""scriptpanel: a multi-format script parser.

scriptpanel turns loosely structured comic scripts, screenplays, stage plays
and TV scripts into one normalized structure of pages, panels, dialogue and
characters, and reconciles edited scripts against previously imported panels.
"""

from .config import ScriptPanelSettings, get_logger, get_settings
from .exceptions import (
    ConfigurationError,
    ParseError,
    ScriptPanelError,
    UnsupportedFormatError,
    ValidationError,
)
from .parser import (
    DiffType,
    ExistingPanel,
    PanelDiff,
    ParsedPage,
    ParsedPanel,
    ParseResult,
    ScriptParser,
    compute_panel_diffs,
    parse_script,
    select_diffs,
    summarize,
)

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "ConfigurationError",
    "DiffType",
    "ExistingPanel",
    "PanelDiff",
    "ParseError",
    "ParseResult",
    "ParsedPage",
    "ParsedPanel",
    "ScriptPanelError",
    "ScriptPanelSettings",
    "ScriptParser",
    "UnsupportedFormatError",
    "ValidationError",
    "__version__",
    "compute_panel_diffs",
    "get_logger",
    "get_settings",
    "parse_script",
    "select_diffs",
    "summarize",
]
