"""Building blocks shared by the per-format vocabularies."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from re import Match, Pattern

from scriptpanel.parser.lines import ParsedLine
from scriptpanel.parser.models import DialogueType

# A page/scene marker only counts when the number is followed by the end of
# the line, a parenthetical note, or a colon/dash separator (which may carry
# a label). "Page fourteen content goes here" therefore stays prose.
MARKER_TAIL = r"(?:\s*\(([^)]*)\))?(?:\s*[:\-–—]\s*(.*?)|\s*\.)?\s*$"

# Panels additionally accept a period separator before inline description.
PANEL_TAIL = r"(?:\s*[:\-–—.]\s*(.*?))?\s*$"

_TRAILING_EMPHASIS = re.compile(r"\*+$")
_INDENT = re.compile(r"^(?: {2,}|\t)")


@dataclass(frozen=True)
class ClassifierContext:
    """Read-only view of the accumulator state the classifier may consult."""

    in_cast_section: bool = False
    pending_character: str | None = None
    in_panel: bool = False
    in_page: bool = False
    in_dialogue_run: bool = False


Builder = Callable[[Match[str], str], ParsedLine | None]
Guard = Callable[[ClassifierContext], bool]


@dataclass(frozen=True)
class Recognizer:
    """One entry of a format's ordered pattern table.

    ``build`` receives the match and the raw (unstripped) line and may
    return None to decline, letting the next recognizer try.
    """

    name: str
    pattern: Pattern[str]
    build: Builder
    when: Guard | None = None

    def apply(
        self, stripped: str, raw_line: str, context: ClassifierContext
    ) -> ParsedLine | None:
        """Return the classified line, or None when this entry does not apply."""
        if self.when is not None and not self.when(context):
            return None
        match = self.pattern.match(stripped)
        if match is None:
            return None
        return self.build(match, raw_line)


def _always_spoken(_modifier: str | None) -> DialogueType:
    return DialogueType.SPOKEN


@dataclass(frozen=True)
class FormatVocabulary:
    """Everything that distinguishes one script format from another.

    Attributes:
        name: Registry key ("comic", "screenplay", "stage_play", "tv")
        display_name: Human readable name
        recognizers: Ordered pattern table; the first match wins
        dialogue_type: Maps a speaker modifier to a dialogue type
        implicit_panels: Unclaimed text opens a panel when none is open
        implicit_page: Content before the first page marker opens one
        sequential_pages: Pages are numbered by order of appearance
        dialogue_requires_indent: Lines after a bare name must be indented
        sfx_in_notes: Sound effects are echoed into the panel's notes
        expects_episode_metadata: Warn when episode/act markers are missing
        act_breaks_in_notes: Act breaks are noted on the next panel
        page_unit: Word for a page in summaries ("page", "scene")
        panel_unit: Word for a panel in summaries ("panel", "shot", "beat")
        structure_hint: Explanation used when no structure was detected
    """

    name: str
    display_name: str
    recognizers: tuple[Recognizer, ...]
    dialogue_type: Callable[[str | None], DialogueType] = _always_spoken
    implicit_panels: bool = False
    implicit_page: bool = False
    sequential_pages: bool = False
    dialogue_requires_indent: bool = True
    sfx_in_notes: bool = False
    expects_episode_metadata: bool = False
    act_breaks_in_notes: bool = False
    page_unit: str = "page"
    panel_unit: str = "panel"
    structure_hint: str = ""

    def recognizer_names(self) -> list[str]:
        """Names of the recognizers in the order they are tried."""
        return [recognizer.name for recognizer in self.recognizers]


def clean_text(text: str) -> str:
    """Strip trailing markdown emphasis and surrounding whitespace."""
    return _TRAILING_EMPHASIS.sub("", text.strip()).strip()


def is_indented(raw_line: str) -> bool:
    """Return True when the line starts with two spaces or a tab."""
    return bool(_INDENT.match(raw_line))


def optional(value: str | None) -> str | None:
    """Strip a captured group, mapping empty strings to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def canonical_name(name: str) -> str:
    """Canonical form of a character name: trimmed, single-spaced, upper-case."""
    return " ".join(clean_text(name).split()).upper()


def in_cast_section(context: ClassifierContext) -> bool:
    """Guard for recognizers that only apply inside a cast list."""
    return context.in_cast_section


def has_pending_character(context: ClassifierContext) -> bool:
    """Guard for recognizers that only apply right after a bare name."""
    return context.pending_character is not None


def outside_page(context: ClassifierContext) -> bool:
    """Guard for title-page lines that only count before the first page."""
    return not context.in_page
