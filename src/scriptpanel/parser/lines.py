"""Classified script lines.

Every input line is classified into exactly one of the dataclasses below.
They only live for the duration of a parse.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class LineKind(str, Enum):
    """Tag identifying the kind of a classified line."""

    PAGE_MARKER = "page_marker"
    PANEL_MARKER = "panel_marker"
    SCENE_HEADING = "scene_heading"
    SHOT_DIRECTION = "shot_direction"
    TRANSITION = "transition"
    DIALOGUE = "dialogue"
    CAPTION = "caption"
    SFX = "sfx"
    SCREEN_TEXT = "screen_text"
    STAGE_DIRECTION = "stage_direction"
    TECHNICAL_CUE = "technical_cue"
    ARTIST_NOTE = "artist_note"
    CHARACTER_NAME_ONLY = "character_name_only"
    PARENTHETICAL = "parenthetical"
    CAST_DEFINITION = "cast_definition"
    SECTION_HEADER = "section_header"
    ACT_MARKER = "act_marker"
    EPISODE_MARKER = "episode_marker"
    ISSUE_METADATA = "issue_metadata"
    IGNORED = "ignored"
    BLANK = "blank"
    PLAIN_TEXT = "plain_text"


class Section(str, Enum):
    """Script regions that change how following lines are read."""

    CAST = "cast"
    ARTIST_NOTES = "artist_notes"
    OTHER = "other"


@dataclass
class PageMarker:
    """Start of a numbered page or scene."""

    kind: ClassVar[LineKind] = LineKind.PAGE_MARKER
    number: int
    label: str | None = None


@dataclass
class PanelMarker:
    """Start of a numbered panel."""

    kind: ClassVar[LineKind] = LineKind.PANEL_MARKER
    number: int
    modifier: str | None = None
    inline_text: str | None = None


@dataclass
class SceneHeading:
    """Screenplay slug line such as ``INT. KITCHEN - NIGHT``."""

    kind: ClassVar[LineKind] = LineKind.SCENE_HEADING
    prefix: str
    location: str
    time_of_day: str | None = None

    @property
    def heading(self) -> str:
        """The heading rebuilt in canonical form."""
        suffix = f" - {self.time_of_day}" if self.time_of_day else ""
        return f"{self.prefix}. {self.location}{suffix}"


@dataclass
class ShotDirection:
    """Camera direction that starts a new shot."""

    kind: ClassVar[LineKind] = LineKind.SHOT_DIRECTION
    marker: str
    description: str = ""


@dataclass
class Transition:
    """Edit transition such as ``CUT TO:``."""

    kind: ClassVar[LineKind] = LineKind.TRANSITION
    label: str


@dataclass
class Dialogue:
    """A character speaking on a single line."""

    kind: ClassVar[LineKind] = LineKind.DIALOGUE
    character: str
    text: str
    modifier: str | None = None


@dataclass
class Caption:
    """Narration caption box."""

    kind: ClassVar[LineKind] = LineKind.CAPTION
    text: str
    subtype: str | None = None


@dataclass
class SFX:
    """Sound effect lettered into the panel."""

    kind: ClassVar[LineKind] = LineKind.SFX
    text: str


@dataclass
class ScreenText:
    """Text shown on a screen, wall, label or phone."""

    kind: ClassVar[LineKind] = LineKind.SCREEN_TEXT
    text: str
    subtype: str | None = None


@dataclass
class StageDirection:
    """Bracketed stage direction; ``blocking`` is set when it forces a beat."""

    kind: ClassVar[LineKind] = LineKind.STAGE_DIRECTION
    text: str
    blocking: str | None = None
    rest: Dialogue | PlainText | None = None


@dataclass
class TechnicalCue:
    """Lighting, sound or music cue."""

    kind: ClassVar[LineKind] = LineKind.TECHNICAL_CUE
    text: str


@dataclass
class ArtistNote:
    """Note addressed to the artist rather than the reader."""

    kind: ClassVar[LineKind] = LineKind.ARTIST_NOTE
    text: str


@dataclass
class CharacterNameOnly:
    """A bare all-caps name whose dialogue follows on the next lines."""

    kind: ClassVar[LineKind] = LineKind.CHARACTER_NAME_ONLY
    name: str
    modifier: str | None = None


@dataclass
class Parenthetical:
    """Delivery note under a character name."""

    kind: ClassVar[LineKind] = LineKind.PARENTHETICAL
    text: str


@dataclass
class CastDefinition:
    """Character declared in a cast list."""

    kind: ClassVar[LineKind] = LineKind.CAST_DEFINITION
    name: str
    description: str


@dataclass
class SectionHeader:
    """Header opening a cast list or artist-notes region."""

    kind: ClassVar[LineKind] = LineKind.SECTION_HEADER
    section: Section


@dataclass
class ActMarker:
    """Act break (ACT TWO, TEASER, TAG)."""

    kind: ClassVar[LineKind] = LineKind.ACT_MARKER
    label: str
    number: int | None = None


@dataclass
class EpisodeMarker:
    """TV episode header."""

    kind: ClassVar[LineKind] = LineKind.EPISODE_MARKER
    number: str | None = None
    title: str | None = None


@dataclass
class IssueFields:
    """Title-page fields read from one line, keyed by IssueMetadata attribute."""

    kind: ClassVar[LineKind] = LineKind.ISSUE_METADATA
    values: dict[str, str]


@dataclass
class Ignored:
    """Line recognized but carrying no content (rules, end markers)."""

    kind: ClassVar[LineKind] = LineKind.IGNORED
    reason: str


@dataclass
class Blank:
    """Empty or whitespace-only line."""

    kind: ClassVar[LineKind] = LineKind.BLANK


@dataclass
class PlainText:
    """Anything no recognizer claimed."""

    kind: ClassVar[LineKind] = LineKind.PLAIN_TEXT
    text: str
    indented: bool = False


ParsedLine = (
    PageMarker
    | PanelMarker
    | SceneHeading
    | ShotDirection
    | Transition
    | Dialogue
    | Caption
    | SFX
    | ScreenText
    | StageDirection
    | TechnicalCue
    | ArtistNote
    | CharacterNameOnly
    | Parenthetical
    | CastDefinition
    | SectionHeader
    | ActMarker
    | EpisodeMarker
    | IssueFields
    | Ignored
    | Blank
    | PlainText
)
