"""Comic script vocabulary (markdown-flavoured page/panel scripts)."""

from __future__ import annotations

import re
from re import Match

from scriptpanel.parser.formats.base import (
    MARKER_TAIL,
    PANEL_TAIL,
    FormatVocabulary,
    Recognizer,
    canonical_name,
    clean_text,
    in_cast_section,
    optional,
)
from scriptpanel.parser.lines import (
    SFX,
    ActMarker,
    ArtistNote,
    Caption,
    CastDefinition,
    CharacterNameOnly,
    Dialogue,
    Ignored,
    IssueFields,
    PageMarker,
    PanelMarker,
    ParsedLine,
    PlainText,
    ScreenText,
    Section,
    SectionHeader,
)
from scriptpanel.parser.models import DialogueType
from scriptpanel.parser.numbers import (
    ROMAN_NUMBER_PATTERN,
    WORD_NUMBER_PATTERN,
    normalize_number,
)

_NUMBER = rf"(\d+|{WORD_NUMBER_PATTERN})"
_NAME = r"([A-Z][A-Z0-9\s\-'\.]{0,30})"
_MODIFIER = r"(?:\s*[\(\[<]([^\)\]>]+)[\)\]>])?"
_COLON = r"\s*(?:\*\*)?\s*:\s*(?:\*\*)?\s*"
_SEPARATOR = r"\s*(?:\*\*)?\s*[:\-]\s*(?:\*\*)?\s*"

THOUGHT_MODIFIERS = frozenset(
    {"thought", "thinking", "inner", "v.o.", "vo", "internal"}
)

# Speaker names that are really lettering labels, not characters.
_NON_SPEAKER_WORDS = (
    "CAPTION",
    "SFX",
    "ON SCREEN",
    "ON WALL",
    "LABEL",
    "NOTE",
    "ARTIST",
)


def comic_dialogue_type(modifier: str | None) -> DialogueType:
    """Thought modifiers render as thought bubbles, everything else is spoken."""
    if modifier and modifier.strip().lower() in THOUGHT_MODIFIERS:
        return DialogueType.THOUGHT
    return DialogueType.SPOKEN


def _page(match: Match[str], _raw: str) -> ParsedLine | None:
    number = normalize_number(match.group(1), roman_limit=0)
    label = optional(match.group(2)) or optional(match.group(3))
    return PageMarker(number=number, label=label)


def _bold_panel(match: Match[str], _raw: str) -> ParsedLine:
    return PanelMarker(
        number=normalize_number(match.group(1), roman_limit=0),
        modifier=optional(match.group(2)),
        inline_text=optional(clean_text(match.group(3) or "")),
    )


def _numbered_panel(match: Match[str], _raw: str) -> ParsedLine:
    return PanelMarker(
        number=int(match.group(1)),
        inline_text=optional(clean_text(match.group(2) or "")),
    )


def _section(section: Section):
    def build(_match: Match[str], _raw: str) -> ParsedLine:
        return SectionHeader(section=section)

    return build


def _cast_definition(match: Match[str], _raw: str) -> ParsedLine:
    description = re.sub(r"^[\s:\-–—]+", "", match.group(2))
    return CastDefinition(
        name=canonical_name(match.group(1)), description=clean_text(description)
    )


def _issue_number(match: Match[str], _raw: str) -> ParsedLine:
    values = {"issue_number": match.group(1)}
    subtitle = optional(match.group(2))
    if subtitle:
        values["subtitle"] = subtitle.strip("\"'“”")
    return IssueFields(values=values)


def _issue_field(name: str):
    def build(match: Match[str], _raw: str) -> ParsedLine:
        return IssueFields(values={name: clean_text(match.group(1))})

    return build


def _act(match: Match[str], _raw: str) -> ParsedLine:
    token = match.group(1)
    if token is None:
        return ActMarker(label="COLD OPEN")
    number = normalize_number(token)
    return ActMarker(label=f"ACT {token.upper()}", number=number or None)


def _artist_note(match: Match[str], _raw: str) -> ParsedLine:
    return ArtistNote(text=clean_text(match.group(1)))


def _caption(match: Match[str], _raw: str) -> ParsedLine:
    return Caption(text=clean_text(match.group(2)), subtype=optional(match.group(1)))


def _sfx(match: Match[str], _raw: str) -> ParsedLine:
    return SFX(text=clean_text(match.group(1)))


def _screen_text(match: Match[str], _raw: str) -> ParsedLine:
    return ScreenText(
        text=clean_text(match.group(2)),
        subtype=" ".join(match.group(1).upper().split()),
    )


def _dialogue(match: Match[str], _raw: str) -> ParsedLine | None:
    name = canonical_name(match.group(1))
    if not name or any(word in name for word in _NON_SPEAKER_WORDS):
        return None
    text = clean_text(match.group(3))
    if not text:
        return None
    return Dialogue(character=name, text=text, modifier=optional(match.group(2)))


def _name_only(match: Match[str], _raw: str) -> ParsedLine | None:
    name = canonical_name(match.group(0))
    if any(word in name for word in _NON_SPEAKER_WORDS):
        return None
    return CharacterNameOnly(name=name)


def _blockquote_text(match: Match[str], _raw: str) -> ParsedLine:
    return PlainText(text=clean_text(match.group(1)))


def _horizontal_rule(_match: Match[str], _raw: str) -> ParsedLine:
    return Ignored(reason="horizontal rule")


RECOGNIZERS: tuple[Recognizer, ...] = (
    Recognizer("horizontal_rule", re.compile(r"^(?:-{3,}|\*{3,})$"), _horizontal_rule),
    # Pages
    Recognizer(
        "page_heading",
        re.compile(rf"^#{{1,3}}\s*PAGE\s+{_NUMBER}{MARKER_TAIL}", re.I),
        _page,
    ),
    Recognizer(
        "page_bold",
        re.compile(
            rf"^\*\*PAGE\s+{_NUMBER}(?:\s*\(([^)]*)\))?\s*[:.]?\s*\*\*"
            r"\s*[:\-–—]?\s*(.*?)\s*$",
            re.I,
        ),
        _page,
    ),
    Recognizer(
        "page_plain",
        re.compile(rf"^(?:PAGE|PG\.?)\s+{_NUMBER}{MARKER_TAIL}", re.I),
        _page,
    ),
    # Panels
    Recognizer(
        "panel_bold_modifier_after",
        re.compile(
            rf"^\*\*(?:PANEL|FRAME)\s+{_NUMBER}\*\*\s*\(([^)]+)\)"
            r"\s*[:\-–—.]?\s*(.*)$",
            re.I,
        ),
        _bold_panel,
    ),
    Recognizer(
        "panel_bold",
        re.compile(
            rf"^\*\*(?:PANEL|FRAME)\s+{_NUMBER}(?:\s*\(([^)]+)\))?\s*[:.]?\s*\*\*"
            r"\s*[:\-–—.]?\s*(.*)$",
            re.I,
        ),
        _bold_panel,
    ),
    Recognizer(
        "panel_plain",
        re.compile(
            r"^(?:PANEL|FRAME|FR|BLOCK|P)\s*(\d+)"
            r"(?:\s*[\[\(]([^\]\)]+)[\]\)])?" + PANEL_TAIL,
            re.I,
        ),
        _bold_panel,
    ),
    Recognizer(
        "panel_word",
        re.compile(
            rf"^(?:PANEL|FRAME|BLOCK)\s+({WORD_NUMBER_PATTERN})"
            r"(?:\s*[\[\(]([^\]\)]+)[\]\)])?" + PANEL_TAIL,
            re.I,
        ),
        _bold_panel,
    ),
    Recognizer(
        "panel_numbered", re.compile(r"^(\d{1,2})\.(?:\s+(.+))?$"), _numbered_panel
    ),
    # Sections
    Recognizer(
        "cast_header",
        re.compile(r"^#{2,3}\s*CAST(?:\s+OF\s+CHARACTERS)?\b", re.I),
        _section(Section.CAST),
    ),
    Recognizer(
        "artist_notes_header",
        re.compile(r"^#{2,3}\s*(?:ARTIST|COLORIST)", re.I),
        _section(Section.ARTIST_NOTES),
    ),
    Recognizer(
        "cast_definition",
        re.compile(r"^\*\*([A-Z][A-Z0-9\s\-'\.]+)\*\*\s*(.+)$"),
        _cast_definition,
        when=in_cast_section,
    ),
    Recognizer(
        "section_end",
        re.compile(r"^#{2,3}\s+\S"),
        _section(Section.OTHER),
        when=in_cast_section,
    ),
    # Title page
    Recognizer(
        "issue_number",
        re.compile(r"^##\s*Issue\s+#?(\d+)(?:\s*[:\-–—]\s*(.+))?$", re.I),
        _issue_number,
    ),
    Recognizer(
        "act_header",
        re.compile(
            rf"^##\s*(?:ACT\s+(\d+|{WORD_NUMBER_PATTERN}|{ROMAN_NUMBER_PATTERN})"
            r"|COLD\s+OPEN)\b.*$",
            re.I,
        ),
        _act,
    ),
    Recognizer("issue_title", re.compile(r"^#\s+(.+)$"), _issue_field("title")),
    Recognizer(
        "written_by",
        re.compile(r"^\*\*Written\s+by\s+(.+?)\*\*$", re.I),
        _issue_field("writer"),
    ),
    Recognizer(
        "page_count",
        re.compile(r"^(\d+)\s+Pages?\s*(?:\||$)", re.I),
        _issue_field("page_count"),
    ),
    Recognizer(
        "timeline",
        re.compile(r"^\*\*Timeline:\s*(.+?)\*\*$", re.I),
        _issue_field("timeline"),
    ),
    # Notes to the artist
    Recognizer("artist_note_emphasis", re.compile(r"^\*\(([^)]+)\)\*$"), _artist_note),
    Recognizer("artist_note_paren", re.compile(r"^\(([^)]+)\)$"), _artist_note),
    Recognizer(
        "artist_note_label",
        re.compile(r"^(?:ARTIST\s*NOTE|NOTE|PROMPT|REF)\s*[:\-]\s*(.+)$", re.I),
        _artist_note,
    ),
    # Lettering
    Recognizer(
        "caption_blockquote",
        re.compile(rf"^>\s*(?:\*\*)?CAPTION(?:\s*\(([^)]+)\))?{_COLON}(.+)$", re.I),
        _caption,
    ),
    Recognizer(
        "caption_bold",
        re.compile(rf"^\*\*CAPTION(?:\s*\(([^)]+)\))?{_COLON}(.+)$", re.I),
        _caption,
    ),
    Recognizer(
        "caption_plain",
        re.compile(r"^CAPTION(?:\s*\(([^)]+)\))?\s*:\s*(.+)$", re.I),
        _caption,
    ),
    Recognizer(
        "sfx_blockquote", re.compile(rf"^>\s*(?:\*\*)?SFX{_COLON}(.+)$", re.I), _sfx
    ),
    Recognizer("sfx_bold", re.compile(rf"^\*\*SFX{_COLON}(.+)$", re.I), _sfx),
    Recognizer("sfx_inline", re.compile(r"^SFX\s*:\s*(.+)$", re.I), _sfx),
    Recognizer(
        "screen_text",
        re.compile(
            r"^(?:>\s*)?(?:\*\*)?(ON\s+SCREEN|ON\s+WALL|ON\s+BOARD|LABEL|ON\s+PHONE"
            r"|ON\s+TV|READOUT|DRONE\s+SCREEN|DRONE\s+FEED)" + _COLON + r"(.+)$",
            re.I,
        ),
        _screen_text,
    ),
    # Dialogue
    Recognizer(
        "dialogue_blockquote",
        re.compile(rf"^>\s*(?:\*\*)?{_NAME}{_MODIFIER}{_SEPARATOR}(.+)$"),
        _dialogue,
    ),
    Recognizer(
        "dialogue_bold",
        re.compile(rf"^\*\*{_NAME}{_MODIFIER}\s*[:\-]\*\*\s*(.+)$"),
        _dialogue,
    ),
    Recognizer(
        "dialogue_bold_alt",
        re.compile(rf"^\*\*{_NAME}{_MODIFIER}\*\*\s*[:\-]\s*(.+)$"),
        _dialogue,
    ),
    Recognizer(
        "dialogue_standard",
        re.compile(
            r"^([A-Z][A-Z0-9\s\-'\.]{1,25})" + _MODIFIER + r"\s*[:\-—]\s*(.+)$"
        ),
        _dialogue,
    ),
    Recognizer(
        "character_name_only", re.compile(r"^[A-Z][A-Z\s\-']{1,25}$"), _name_only
    ),
    Recognizer("blockquote_text", re.compile(r"^>\s*(.*)$"), _blockquote_text),
)

COMIC = FormatVocabulary(
    name="comic",
    display_name="Comic script",
    recognizers=RECOGNIZERS,
    dialogue_type=comic_dialogue_type,
    dialogue_requires_indent=True,
    structure_hint=(
        'No story structure detected. Ensure pages start with "PAGE 1" or '
        '"### PAGE ONE" and panels with "Panel 1" or "**Panel 1**".'
    ),
)
