"""Turn the accumulator's final state into a ``ParseResult``."""

from __future__ import annotations

import re
from collections import Counter

from scriptpanel.parser.accumulator import CAPTION_SPEAKER, AccumulatorState
from scriptpanel.parser.formats.base import FormatVocabulary
from scriptpanel.parser.models import CharacterCount, ParsedPage, ParseResult

# Lettering labels and cue words that must never appear in the roster.
RESERVED_KEYWORDS = (
    "CAPTION",
    "SFX",
    "TITLE",
    "SUBTITLE",
    "TEXT",
    "NARRATION",
    "DESCRIPTION",
    "ACTION",
    "SOUND",
    "ON SCREEN",
    "ON WALL",
    "LABEL",
    "READOUT",
    "NOTE",
)

_RESERVED_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(keyword) for keyword in RESERVED_KEYWORDS) + r")\b"
)


def is_reserved_name(name: str) -> bool:
    """Return True when a name contains a reserved keyword as a whole word."""
    return bool(_RESERVED_PATTERN.search(name.upper()))


def order_pages(pages: list[ParsedPage], warnings: list[str]) -> list[ParsedPage]:
    """Sort pages by number, dropping page 0 and earlier duplicates.

    Args:
        pages: Pages in the order they were parsed
        warnings: Receives one message per dropped page

    Returns:
        Pages with unique, ascending numbers
    """
    by_number: dict[int, ParsedPage] = {}
    for page in pages:
        if page.page_number <= 0:
            warnings.append(
                "Dropped content before the first page marker "
                "(page number could not be determined)"
            )
            continue
        if page.page_number in by_number:
            warnings.append(
                f"Duplicate page {page.page_number}: keeping the later occurrence"
            )
        by_number[page.page_number] = page
    return [by_number[number] for number in sorted(by_number)]


def build_roster(state: AccumulatorState) -> list[CharacterCount]:
    """Merge cast-list declarations with dialogue tallies.

    Args:
        state: Final accumulator state

    Returns:
        Characters sorted by descending dialogue count, then by name
    """
    names = list(state.cast) + [name for name in state.tally if name not in state.cast]
    roster = [
        CharacterCount(
            name=name,
            count=state.tally.get(name, 0),
            description=state.cast.get(name) or None,
        )
        for name in names
        if name and name != CAPTION_SPEAKER and not is_reserved_name(name)
    ]
    roster = [entry for entry in roster if entry.count or entry.description]
    return sorted(roster, key=lambda entry: (-entry.count, entry.name))


def parse_succeeded(errors: list[str], pages: list[ParsedPage]) -> bool:
    """A parse succeeds without errors, or with at least one page despite them."""
    return not errors or len(pages) > 0


def count_visual_markers(pages: list[ParsedPage]) -> dict[str, int]:
    """Histogram of the visual-marker tags of every emitted panel."""
    counts = Counter(panel.visual_marker for page in pages for panel in page.panels)
    return dict(sorted(counts.items()))


def assemble_result(
    state: AccumulatorState,
    vocabulary: FormatVocabulary,
) -> ParseResult:
    """Build the public result from the accumulator's final state.

    Args:
        state: State returned by ``Accumulator.finish()``
        vocabulary: Vocabulary of the parsed format

    Returns:
        The normalized parse result
    """
    warnings = list(state.warnings)
    errors: list[str] = []
    pages = order_pages(state.pages, warnings)

    if not pages:
        errors.append(vocabulary.structure_hint)

    issue = state.issue
    if vocabulary.expects_episode_metadata and pages:
        if not issue.episode_number:
            warnings.append('No episode number found (expected "EPISODE 101")')
        if not issue.act_breaks:
            warnings.append('No act breaks found (expected "TEASER" or "ACT ONE")')

    success = parse_succeeded(errors, pages)
    if not success:
        return ParseResult(
            success=False,
            errors=errors,
            warnings=warnings,
            script_format=vocabulary.name,
        )

    return ParseResult(
        success=success,
        pages=pages,
        characters=build_roster(state),
        errors=errors,
        warnings=warnings,
        issue_metadata=None if issue.is_empty() else issue,
        visual_markers=count_visual_markers(pages),
        script_format=vocabulary.name,
    )
