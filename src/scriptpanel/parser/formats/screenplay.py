"""Screenplay vocabulary: slug lines, camera shots, transitions, dialogue blocks."""

from __future__ import annotations

import re
from re import Match

from scriptpanel.parser.formats.base import (
    FormatVocabulary,
    Recognizer,
    canonical_name,
    clean_text,
    has_pending_character,
    optional,
)
from scriptpanel.parser.lines import (
    SFX,
    CharacterNameOnly,
    Parenthetical,
    ParsedLine,
    SceneHeading,
    ShotDirection,
    Transition,
)
from scriptpanel.parser.models import DialogueType

SCENE_HEADING_PATTERN = re.compile(
    r"^(INT\.?/EXT|EXT\.?/INT|I/E|INT|EXT)\.\s*(.+)$", re.I
)
_TIME_SPLIT = re.compile(r"\s+[-–—]\s+")

# Longest spellings first so "CLOSE UP" is not read as "CU".
SHOT_TYPES = (
    "EXTREME CLOSE UP",
    "EXTREME CLOSE-UP",
    "CLOSE UP",
    "CLOSE-UP",
    "CLOSE ON",
    "ANGLE ON",
    "ECU",
    "CU",
    "WIDE SHOT",
    "WIDE ON",
    "WIDE",
    "WS",
    "ESTABLISHING SHOT",
    "ESTABLISHING",
    "EST.",
    "P.O.V.",
    "POV",
    "INSERT",
    "TWO SHOT",
    "2-SHOT",
    "2 SHOT",
    "OVER THE SHOULDER",
    "O.T.S.",
    "OTS",
    "TRACKING SHOT",
    "TRACKING",
    "PAN TO",
    "PUSH IN",
    "PULL BACK",
    "MEDIUM SHOT",
    "MED.",
    "MS",
    "LONG SHOT",
    "LS",
    "FULL SHOT",
    "LOW ANGLE",
    "HIGH ANGLE",
    "DUTCH ANGLE",
    "CANTED",
    "TILTED",
    "CRANE SHOT",
    "DOLLY",
    "AERIAL",
    "BIRD'S EYE",
)

SHOT_ALIASES: dict[str, str] = {
    "ECU": "EXTREME CLOSE UP",
    "EXTREME CLOSE-UP": "EXTREME CLOSE UP",
    "CU": "CLOSE UP",
    "CLOSE-UP": "CLOSE UP",
    "CLOSE ON": "CLOSE UP",
    "WS": "WIDE SHOT",
    "WIDE ON": "WIDE SHOT",
    "WIDE": "WIDE SHOT",
    "ESTABLISHING SHOT": "ESTABLISHING",
    "EST.": "ESTABLISHING",
    "P.O.V.": "POV",
    "OTS": "OVER THE SHOULDER",
    "O.T.S.": "OVER THE SHOULDER",
    "TRACKING SHOT": "TRACKING",
    "MS": "MEDIUM SHOT",
    "MED.": "MEDIUM SHOT",
    "LS": "LONG SHOT",
    "2-SHOT": "TWO SHOT",
    "2 SHOT": "TWO SHOT",
}

_SHOT_ALTERNATION = "|".join(re.escape(shot) for shot in SHOT_TYPES)

TRANSITION_PATTERN = re.compile(
    r"^(?:(?:HARD\s+|JUMP\s+|MATCH\s+|SMASH\s+|TIME\s+)?CUT(?:\s+TO)?"
    r"|FADE\s+(?:TO(?:\s+BLACK)?|OUT|IN)|DISSOLVE(?:\s+TO)?|CROSSFADE(?:\s+TO)?"
    r"|WIPE\s+TO|IRIS\s+(?:IN|OUT)|END\s+OF\s+SCENE)\s*[:.]?$"
)

VOICEOVER_MODIFIERS = frozenset({"V.O.", "VO", "VOICE OVER", "VOICEOVER"})

# All-caps lines that are never speaker names.
RESERVED_WORDS = frozenset(
    {
        "FADE IN",
        "FADE OUT",
        "FADE TO BLACK",
        "CUT TO",
        "DISSOLVE TO",
        "CONTINUED",
        "MORE",
        "THE END",
        "END",
        "TITLE",
        "TITLE CARD",
        "SUPER",
        "INTERCUT",
        "INTERCUT WITH",
        "BACK TO",
        "BACK TO SCENE",
        "LATER",
        "MOMENTS LATER",
        "CONTINUOUS",
        "FLASHBACK",
        "END FLASHBACK",
        "MONTAGE",
        "END MONTAGE",
        "SERIES OF SHOTS",
        "END SERIES OF SHOTS",
        "OVER BLACK",
        "BLACK",
        "SILENCE",
    }
)

_CHARACTER_PATTERN = re.compile(r"^([A-Z][A-Z0-9\s'.\-]{0,35}?)\s*(?:\(([^)]+)\))?$")


def screenplay_dialogue_type(modifier: str | None) -> DialogueType:
    """V.O. style extensions are voiceover, everything else is spoken."""
    if modifier:
        tokens = {token.strip(" ()").upper() for token in re.split(r"[,;/]", modifier)}
        if tokens & VOICEOVER_MODIFIERS:
            return DialogueType.VOICEOVER
    return DialogueType.SPOKEN


def normalize_shot(marker: str) -> str:
    """Map shorthand such as ``ECU`` or ``OTS`` to its canonical shot name."""
    key = " ".join(marker.upper().split())
    return SHOT_ALIASES.get(key, key)


def _scene_heading(match: Match[str], _raw: str) -> ParsedLine | None:
    prefix = match.group(1).upper().replace(".", "")
    rest = clean_text(match.group(2)).rstrip(".")
    parts = _TIME_SPLIT.split(rest)
    if len(parts) > 1:
        location, time_of_day = " - ".join(parts[:-1]), parts[-1]
    else:
        location, time_of_day = rest, None
    if not location:
        return None
    return SceneHeading(
        prefix=prefix, location=location.strip(), time_of_day=time_of_day
    )


def _shot(match: Match[str], _raw: str) -> ParsedLine:
    return ShotDirection(
        marker=normalize_shot(match.group(1)),
        description=clean_text(match.group(2) or ""),
    )


def _transition(match: Match[str], _raw: str) -> ParsedLine:
    return Transition(label=match.group(0).strip())


def _sfx(match: Match[str], _raw: str) -> ParsedLine:
    return SFX(text=clean_text(match.group(1)))


def _parenthetical(match: Match[str], _raw: str) -> ParsedLine:
    return Parenthetical(text=match.group(1).strip())


def _character(match: Match[str], raw: str) -> ParsedLine | None:
    if not 2 <= len(raw.strip()) <= 40:
        return None
    name = canonical_name(match.group(1))
    if not name or name.replace(" ", "").isdigit():
        return None
    if name in RESERVED_WORDS or name.rstrip(":") in RESERVED_WORDS:
        return None
    modifier = optional(match.group(2))
    return CharacterNameOnly(name=name, modifier=modifier)


SCREENPLAY_RECOGNIZERS: tuple[Recognizer, ...] = (
    Recognizer("scene_heading", SCENE_HEADING_PATTERN, _scene_heading),
    Recognizer(
        "shot_with_subject",
        re.compile(rf"^({_SHOT_ALTERNATION})\s*[-–—:]\s*(.+)$"),
        _shot,
    ),
    Recognizer(
        "shot_only",
        re.compile(rf"^({_SHOT_ALTERNATION})()\s*:?$"),
        _shot,
    ),
    Recognizer(
        "shot_on_subject",
        re.compile(r"^((?:ANGLE|CLOSE|WIDE)\s+ON)\s+(.+)$"),
        _shot,
    ),
    Recognizer("transition", TRANSITION_PATTERN, _transition),
    Recognizer(
        "sfx",
        re.compile(r"^(?:SFX|SOUND|AUDIO|FX)\s*[:–—-]\s*(.+)$", re.I),
        _sfx,
    ),
    Recognizer(
        "parenthetical",
        re.compile(r"^\(([^)]*)\)$"),
        _parenthetical,
        when=has_pending_character,
    ),
    Recognizer("character_name", _CHARACTER_PATTERN, _character),
)

SCREENPLAY = FormatVocabulary(
    name="screenplay",
    display_name="Screenplay",
    recognizers=SCREENPLAY_RECOGNIZERS,
    dialogue_type=screenplay_dialogue_type,
    implicit_panels=True,
    sequential_pages=True,
    dialogue_requires_indent=False,
    sfx_in_notes=True,
    page_unit="scene",
    panel_unit="shot",
    structure_hint=(
        "No scenes detected. Ensure scenes start with a heading such as "
        '"INT. LOCATION - DAY" or "EXT. LOCATION - NIGHT".'
    ),
)
