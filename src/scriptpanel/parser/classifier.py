"""Classify raw script lines against a format's ordered pattern table."""

from __future__ import annotations

from scriptpanel.parser.formats.base import (
    ClassifierContext,
    FormatVocabulary,
    is_indented,
)
from scriptpanel.parser.lines import Blank, ParsedLine, PlainText


def classify_line(
    raw_line: str,
    vocabulary: FormatVocabulary,
    context: ClassifierContext | None = None,
) -> ParsedLine:
    """Classify one line of a script.

    Recognizers are tried in table order and the first one that accepts the
    line wins. Lines nobody claims come back as ``PlainText``, carrying
    whether they were indented so that the accumulator can attach them to a
    pending speaker.

    Args:
        raw_line: The line as it appears in the source, without the newline
        vocabulary: Pattern table of the script format
        context: Accumulator state the recognizers may consult

    Returns:
        Exactly one classified line
    """
    stripped = raw_line.strip()
    if not stripped:
        return Blank()

    context = context or ClassifierContext()
    for recognizer in vocabulary.recognizers:
        parsed = recognizer.apply(stripped, raw_line, context)
        if parsed is not None:
            return parsed

    return PlainText(text=stripped, indented=is_indented(raw_line))
