"""Data models for parsed scripts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class DialogueType(str, Enum):
    """How a line of dialogue is delivered."""

    SPOKEN = "spoken"
    VOICEOVER = "voiceover"
    CAPTION = "caption"
    THOUGHT = "thought"


class AspectRatio(str, Enum):
    """Intended image proportions of a panel."""

    WIDE = "wide"
    STD = "std"
    SQUARE = "square"
    TALL = "tall"
    PORTRAIT = "portrait"


class DiffType(str, Enum):
    """Classification of a panel when re-parsing an edited script."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


@dataclass
class DialogueLine:
    """Represents a dialogue entry."""

    character: str
    text: str
    type: DialogueType = DialogueType.SPOKEN
    modifier: str | None = None


@dataclass
class ScreenText:
    """Text shown inside the artwork (screens, walls, labels, phones)."""

    text: str
    subtype: str | None = None


@dataclass
class ParsedPanel:
    """Represents a panel (comic) or beat (stage and screen)."""

    panel_number: int
    description: str
    dialogue: list[DialogueLine] = field(default_factory=list)
    characters: list[str] = field(default_factory=list)
    visual_marker: str = "standard"
    aspect_ratio: AspectRatio = AspectRatio.WIDE
    artist_notes: str | None = None
    panel_modifier: str | None = None
    sound_effects: list[str] = field(default_factory=list)
    screen_text: list[ScreenText] = field(default_factory=list)
    start_offset: int = 0
    end_offset: int = 0


@dataclass
class ParsedPage:
    """Represents a page (comic) or scene (stage and screen)."""

    page_number: int
    panels: list[ParsedPanel] = field(default_factory=list)
    notes: str | None = None
    heading: str | None = None
    act: str | None = None


@dataclass
class CharacterCount:
    """A character in the roster with their dialogue tally."""

    name: str
    count: int = 0
    description: str | None = None


@dataclass
class IssueMetadata:
    """Title-page information for comic issues and TV episodes."""

    title: str | None = None
    issue_number: int | None = None
    subtitle: str | None = None
    writer: str | None = None
    page_count: int | None = None
    timeline: str | None = None
    episode_number: str | None = None
    episode_title: str | None = None
    act_breaks: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Return True when no field carries information."""
        return not any(asdict(self).values())


@dataclass
class ParseResult:
    """Normalized output of a parse, shared by every script format."""

    success: bool
    pages: list[ParsedPage] = field(default_factory=list)
    characters: list[CharacterCount] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    issue_metadata: IssueMetadata | None = None
    visual_markers: dict[str, int] = field(default_factory=dict)
    script_format: str = "comic"

    @property
    def panel_count(self) -> int:
        """Total number of panels across all pages."""
        return sum(len(page.panels) for page in self.pages)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return _jsonable(asdict(self))


@dataclass
class PanelSnapshot:
    """The comparable state of a panel on one side of a diff."""

    description: str
    visual_marker: str | None = None
    aspect_ratio: AspectRatio | None = None


@dataclass
class ExistingPanel:
    """A previously imported panel, addressed by its script coordinate."""

    page_number: int
    panel_number: int
    description: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExistingPanel:
        """Build from a mapping using snake_case or camelCase keys.

        The description may also be given as ``prompt``, and the coordinate
        may be nested under ``script_ref`` / ``scriptRef``.
        """
        ref = data.get("script_ref") or data.get("scriptRef") or data
        if not isinstance(ref, Mapping):
            raise TypeError("script_ref must be a mapping")
        page = ref.get("page_number", ref.get("pageNumber"))
        panel = ref.get("panel_number", ref.get("panelNumber"))
        if page is None or panel is None:
            raise KeyError("page_number and panel_number are required")
        description = data.get("description", data.get("prompt", ""))
        return cls(
            page_number=int(page),
            panel_number=int(panel),
            description=str(description or ""),
        )


@dataclass
class PanelDiff:
    """One reconciled panel coordinate."""

    type: DiffType
    page_number: int
    panel_number: int
    before: PanelSnapshot | None = None
    after: PanelSnapshot | None = None

    @property
    def key(self) -> tuple[int, int]:
        """The (page_number, panel_number) coordinate."""
        return (self.page_number, self.panel_number)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return _jsonable(asdict(self))


def _jsonable(value: Any) -> Any:
    """Replace enum members with their values, recursively."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_jsonable(item) for item in value]
    return value
