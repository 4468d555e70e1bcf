"""Human-readable summaries of parse results."""

from __future__ import annotations

from scriptpanel.parser.formats import get_vocabulary
from scriptpanel.parser.models import IssueMetadata, ParseResult

MAX_LISTED_CHARACTERS = 10
MAX_DESCRIPTION_CHARS = 50

# Heading for the visual-marker histogram, per format.
_MARKER_HEADINGS = {
    "comic": "Visual markers",
    "screenplay": "Shot types",
    "stage_play": "Blocking",
    "tv": "Shot types",
}


def _metadata_lines(issue: IssueMetadata) -> list[str]:
    lines = []
    if issue.episode_number:
        lines.append(f"Episode: {issue.episode_number}")
    if issue.episode_title:
        lines.append(f'Episode title: "{issue.episode_title}"')
    if issue.title:
        lines.append(f"Title: {issue.title}")
    if issue.issue_number:
        lines.append(f"Issue #{issue.issue_number}")
    if issue.subtitle:
        lines.append(f'"{issue.subtitle}"')
    if issue.writer:
        lines.append(f"Written by: {issue.writer}")
    if issue.page_count:
        lines.append(f"Pages: {issue.page_count}")
    if issue.timeline:
        lines.append(f"Timeline: {issue.timeline}")
    if issue.act_breaks:
        lines.append("Acts: " + ", ".join(issue.act_breaks))
    return lines


def _plural(word: str, count: int) -> str:
    return word if count == 1 else f"{word}s"


def summarize(result: ParseResult) -> str:
    """Describe a parse result in a few lines of plain text.

    The wording follows the script format: comics report pages and panels,
    screenplays and TV scripts report scenes and shots, stage plays report
    scenes and beats.

    Args:
        result: Result returned by ``parse_script``

    Returns:
        Multi-line summary text
    """
    if not result.success:
        return "Parse failed: " + "; ".join(result.errors)

    vocabulary = get_vocabulary(result.script_format)
    lines: list[str] = []

    if result.issue_metadata:
        lines.extend(_metadata_lines(result.issue_metadata))
        lines.append("")

    pages = len(result.pages)
    panels = result.panel_count
    lines.append(
        f"{vocabulary.display_name}: {pages} {_plural(vocabulary.page_unit, pages)}, "
        f"{panels} {_plural(vocabulary.panel_unit, panels)}"
    )

    if result.characters:
        lines.append("")
        lines.append(f"Characters ({len(result.characters)}):")
        for character in result.characters[:MAX_LISTED_CHARACTERS]:
            lines_word = _plural("line", character.count)
            entry = f"  - {character.name}: {character.count} {lines_word}"
            if character.description:
                description = character.description
                if len(description) > MAX_DESCRIPTION_CHARS:
                    description = description[:MAX_DESCRIPTION_CHARS].rstrip() + "..."
                entry += f" ({description})"
            lines.append(entry)

    if result.visual_markers:
        lines.append("")
        lines.append(f"{_MARKER_HEADINGS.get(vocabulary.name, 'Visual markers')}:")
        ranked = sorted(
            result.visual_markers.items(), key=lambda item: (-item[1], item[0])
        )
        for marker, count in ranked:
            lines.append(f"  - {marker}: {count}")

    if result.warnings:
        lines.append("")
        lines.append(f"Warnings ({len(result.warnings)}):")
        lines.extend(f"  - {warning}" for warning in result.warnings)

    return "\n".join(lines)
