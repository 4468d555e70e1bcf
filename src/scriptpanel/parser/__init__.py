"""Multi-format script parser for scriptpanel."""

from __future__ import annotations

from .models import (
    AspectRatio,
    CharacterCount,
    DialogueLine,
    DialogueType,
    DiffType,
    ExistingPanel,
    IssueMetadata,
    PanelDiff,
    PanelSnapshot,
    ParsedPage,
    ParsedPanel,
    ParseResult,
    ScreenText,
)
from .reparse import compute_panel_diffs, select_diffs
from .script_parser import ScriptParser, parse_script
from .summary import summarize

__all__ = [
    "AspectRatio",
    "CharacterCount",
    "DialogueLine",
    "DialogueType",
    "DiffType",
    "ExistingPanel",
    "IssueMetadata",
    "PanelDiff",
    "PanelSnapshot",
    "ParseResult",
    "ParsedPage",
    "ParsedPanel",
    "ScreenText",
    "ScriptParser",
    "compute_panel_diffs",
    "parse_script",
    "select_diffs",
    "summarize",
]
