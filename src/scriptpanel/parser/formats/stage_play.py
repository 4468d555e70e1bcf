"""Stage play vocabulary: acts, scenes, stage directions and technical cues."""

from __future__ import annotations

import re
from re import Match

from scriptpanel.parser.formats.base import (
    MARKER_TAIL,
    FormatVocabulary,
    Recognizer,
    canonical_name,
    clean_text,
    optional,
)
from scriptpanel.parser.lines import (
    ActMarker,
    Dialogue,
    Ignored,
    PageMarker,
    ParsedLine,
    PlainText,
    StageDirection,
    TechnicalCue,
)
from scriptpanel.parser.models import DialogueType
from scriptpanel.parser.numbers import (
    ROMAN_NUMBER_PATTERN,
    WORD_NUMBER_PATTERN,
    normalize_number,
)

_NUMBER = rf"(\d+|{WORD_NUMBER_PATTERN}|{ROMAN_NUMBER_PATTERN})"

ENTRANCE = "ENTRANCE"
EXIT = "EXIT"
BLOCKING = "BLOCKING"

_ENTRANCE_PATTERN = re.compile(r"\b(?:enters?|entering)\b", re.I)
_EXIT_PATTERN = re.compile(r"\b(?:exits?|exiting|exeunt)\b", re.I)

BLOCKING_VERBS = frozenset(
    {
        "enter",
        "enters",
        "entering",
        "exit",
        "exits",
        "exiting",
        "exeunt",
        "cross",
        "crosses",
        "crossing",
        "move",
        "moves",
        "moving",
        "sit",
        "sits",
        "sitting",
        "stand",
        "stands",
        "standing",
        "rise",
        "rises",
        "rising",
        "turn",
        "turns",
        "turning",
        "gesture",
        "gestures",
        "gesturing",
        "walk",
        "walks",
        "walking",
        "run",
        "runs",
        "running",
        "approach",
        "approaches",
        "approaching",
        "retreat",
        "retreats",
        "retreating",
        "kneel",
        "kneels",
        "kneeling",
        "fall",
        "falls",
        "falling",
        "embrace",
        "embraces",
        "embracing",
        "kiss",
        "kisses",
        "kissing",
        "fight",
        "fights",
        "fighting",
        "dance",
        "dances",
        "dancing",
    }
)

OFFSTAGE_MODIFIERS = frozenset(
    {"O.S.", "OS", "OFF", "OFFSTAGE", "OFF-STAGE", "V.O.", "VO", "VOICE OVER"}
)

# Cue words that look like speaker names in "NAME: text" form.
RESERVED_SPEAKERS = frozenset(
    {
        "LIGHTS",
        "LIGHT",
        "SOUND",
        "MUSIC",
        "SFX",
        "BLACKOUT",
        "CURTAIN",
        "END",
        "ACT",
        "SCENE",
    }
)

_WORD = re.compile(r"[A-Za-z'-]+")

_DIALOGUE_UPPER = re.compile(
    r"^([A-Z][A-Z0-9\s'.\-]{0,30})(?:\s*\(([^)]+)\))?\s*[:.\-—]\s*(.+)$"
)
_DIALOGUE_TITLE_CASE = re.compile(
    r"^([A-Z][a-z]+(?:\s[A-Z][a-z]+){0,2})(?:\s*\(([^)]+)\))?\s*:\s*(.+)$"
)


def stage_dialogue_type(modifier: str | None) -> DialogueType:
    """Offstage and voice-over modifiers are voiceover."""
    if modifier and modifier.strip().upper() in OFFSTAGE_MODIFIERS:
        return DialogueType.VOICEOVER
    return DialogueType.SPOKEN


def blocking_kind(direction: str, *, verbs: bool = True) -> str | None:
    """Classify a stage direction as an entrance, an exit or other blocking.

    Args:
        direction: Text of the direction without brackets
        verbs: Also check the blocking-verb list, not only entrances/exits

    Returns:
        ``ENTRANCE``, ``EXIT``, ``BLOCKING`` or None for a plain direction
    """
    if _ENTRANCE_PATTERN.search(direction):
        return ENTRANCE
    if _EXIT_PATTERN.search(direction):
        return EXIT
    words = {word.lower() for word in _WORD.findall(direction)}
    if verbs and words & BLOCKING_VERBS:
        return BLOCKING
    return None


def _dialogue(match: Match[str], _raw: str = "") -> Dialogue | None:
    name = canonical_name(match.group(1))
    spoken = clean_text(match.group(3))
    if not name or name in RESERVED_SPEAKERS or not spoken:
        return None
    return Dialogue(character=name, text=spoken, modifier=optional(match.group(2)))


def parse_dialogue(text: str) -> Dialogue | None:
    """Read ``NAME: text`` / ``NAME. text`` / ``Name: text`` dialogue."""
    for pattern in (_DIALOGUE_UPPER, _DIALOGUE_TITLE_CASE):
        match = pattern.match(text)
        if match is not None:
            return _dialogue(match)
    return None


def _act(match: Match[str], _raw: str) -> ParsedLine | None:
    number = normalize_number(match.group(1))
    if not number:
        return None
    return ActMarker(label=f"ACT {number}", number=number)


def _scene(match: Match[str], _raw: str) -> ParsedLine | None:
    number = normalize_number(match.group(1))
    if not number:
        return None
    label = optional(match.group(3)) or optional(match.group(2))
    heading = f"SCENE {number}: {label}" if label else f"SCENE {number}"
    return PageMarker(number=number, label=heading)


def _end_marker(match: Match[str], _raw: str) -> ParsedLine:
    return Ignored(reason=f"end marker: {match.group(0).strip()}")


def _technical_cue(match: Match[str], _raw: str) -> ParsedLine:
    return TechnicalCue(text=clean_text(match.group(0)).strip("[]"))


def _direction(match: Match[str], _raw: str) -> ParsedLine:
    text = clean_text(match.group(1))
    return StageDirection(text=text, blocking=blocking_kind(text))


def _inline_direction(match: Match[str], _raw: str) -> ParsedLine:
    text = clean_text(match.group(1))
    remainder = clean_text(match.group(2))
    rest = parse_dialogue(remainder) or PlainText(text=remainder)
    # Only entrances and exits split a beat when a line follows the direction.
    return StageDirection(
        text=text, blocking=blocking_kind(text, verbs=False), rest=rest
    )


STAGE_PLAY_RECOGNIZERS: tuple[Recognizer, ...] = (
    Recognizer(
        "end_marker",
        re.compile(
            r"^(?:END\s+OF\s+(?:ACT|SCENE|PLAY)\b.*"
            r"|(?:CURTAIN|BLACKOUT|THE\s+END|FIN(?:IS|ALE)?)\s*\.?"
            r"|\[\s*END\s+OF\s+[^\]]*\])$",
            re.I,
        ),
        _end_marker,
    ),
    Recognizer("act", re.compile(rf"^ACT\s+{_NUMBER}{MARKER_TAIL}", re.I), _act),
    Recognizer("scene", re.compile(rf"^SCENE\s+{_NUMBER}{MARKER_TAIL}", re.I), _scene),
    Recognizer(
        "technical_cue",
        re.compile(
            r"^(?:(?:LIGHTS?|SOUND|MUSIC|SFX)\s*:\s*.+"
            r"|BLACKOUT\b.*"
            r"|CURTAIN\s*(?:UP|DOWN|OPENS?|CLOSES?|RISES|FALLS)\b.*"
            r"|\[\s*(?:LIGHTS?|SOUND|MUSIC)\b[^\]]*\])$",
            re.I,
        ),
        _technical_cue,
    ),
    Recognizer("stage_direction", re.compile(r"^[\[\(]([^\]\)]+)[\]\)]$"), _direction),
    Recognizer("dialogue", _DIALOGUE_UPPER, _dialogue),
    Recognizer("dialogue_title_case", _DIALOGUE_TITLE_CASE, _dialogue),
    Recognizer(
        "inline_stage_direction",
        re.compile(r"^[\[\(]([^\]\)]+)[\]\)]\s*(.+)$"),
        _inline_direction,
    ),
)

STAGE_PLAY = FormatVocabulary(
    name="stage_play",
    display_name="Stage play",
    recognizers=STAGE_PLAY_RECOGNIZERS,
    dialogue_type=stage_dialogue_type,
    implicit_panels=True,
    implicit_page=True,
    sequential_pages=True,
    dialogue_requires_indent=False,
    page_unit="scene",
    panel_unit="beat",
    structure_hint=(
        "No scenes detected. Ensure the play contains scenes such as "
        '"SCENE 1" or character dialogue such as "HAMLET: To be, or not to be".'
    ),
)
