"""Television vocabulary: screenplay rules plus episode headers and act breaks."""

from __future__ import annotations

import re
from re import Match

from scriptpanel.parser.formats.base import (
    FormatVocabulary,
    Recognizer,
    clean_text,
    optional,
    outside_page,
)
from scriptpanel.parser.formats.screenplay import (
    SCREENPLAY_RECOGNIZERS,
    screenplay_dialogue_type,
)
from scriptpanel.parser.lines import ActMarker, EpisodeMarker, Ignored, ParsedLine
from scriptpanel.parser.numbers import normalize_number

_ACT_WORDS = ("ONE", "TWO", "THREE", "FOUR", "FIVE")
_QUOTED = re.compile(r"[\"“'‘](.+?)[\"”'’]")


def _episode(match: Match[str], _raw: str) -> ParsedLine:
    season, episode = match.group("season"), match.group("episode")
    number = f"{season}x{episode}" if season else episode
    rest = optional(re.sub(r"^[\s:\-–—]+", "", match.group("rest") or ""))
    title = None
    if rest:
        quoted = _QUOTED.search(rest)
        title = quoted.group(1).strip() if quoted else clean_text(rest)
    return EpisodeMarker(number=number, title=title or None)


def _episode_title(match: Match[str], _raw: str) -> ParsedLine:
    return EpisodeMarker(title=match.group(1).strip())


def _act_break(match: Match[str], _raw: str) -> ParsedLine:
    label = " ".join(match.group(0).upper().rstrip(":.").split())
    return ActMarker(label=label)


def _numbered_act(match: Match[str], _raw: str) -> ParsedLine:
    token = match.group(1).upper()
    number = normalize_number(token)
    if token.isdigit():
        token = _ACT_WORDS[number - 1]
    return ActMarker(label=f"ACT {token}", number=number)


def _act_end(match: Match[str], _raw: str) -> ParsedLine:
    return Ignored(reason=f"act end: {match.group(0).strip()}")


TV_RECOGNIZERS: tuple[Recognizer, ...] = (
    Recognizer(
        "episode",
        re.compile(
            r"^(?:EPISODE|EP\.?)\s*(?:(?P<season>\d+)x)?(?P<episode>\d+)"
            r"(?P<rest>\s*[:\-–—].*|\s+[\"“'‘].*)?$",
            re.I,
        ),
        _episode,
    ),
    Recognizer(
        "episode_title",
        re.compile(r"^[\"“](.+?)[\"”]$"),
        _episode_title,
        when=outside_page,
    ),
    Recognizer(
        "act_end",
        re.compile(
            r"^END\s+(?:OF\s+)?"
            r"(?:TEASER|COLD\s+OPEN|TAG|EPISODE|ACT(?:\s+\w+)?)\s*[:.]?$"
        ),
        _act_end,
    ),
    Recognizer(
        "act_break",
        re.compile(r"^(?:TEASER|COLD\s+OPEN|TAG|EPILOGUE)\s*[:.]?$"),
        _act_break,
    ),
    Recognizer(
        "act_numbered",
        re.compile(r"^ACT\s+(ONE|TWO|THREE|FOUR|FIVE|[1-5])\s*[:.]?$"),
        _numbered_act,
    ),
    *SCREENPLAY_RECOGNIZERS,
)

TV = FormatVocabulary(
    name="tv",
    display_name="TV script",
    recognizers=TV_RECOGNIZERS,
    dialogue_type=screenplay_dialogue_type,
    implicit_panels=True,
    sequential_pages=True,
    dialogue_requires_indent=False,
    sfx_in_notes=True,
    expects_episode_metadata=True,
    act_breaks_in_notes=True,
    page_unit="scene",
    panel_unit="shot",
    structure_hint=(
        "No scenes detected. Ensure scenes start with a heading such as "
        '"INT. LOCATION - DAY" and acts with "TEASER" or "ACT ONE".'
    ),
)
