"""Per-format pattern tables and the registry that looks them up by name."""

from __future__ import annotations

from scriptpanel.config.settings import normalize_format_name
from scriptpanel.exceptions import UnsupportedFormatError
from scriptpanel.parser.formats.base import (
    ClassifierContext,
    FormatVocabulary,
    Recognizer,
)
from scriptpanel.parser.formats.comic import COMIC
from scriptpanel.parser.formats.screenplay import SCREENPLAY
from scriptpanel.parser.formats.stage_play import STAGE_PLAY
from scriptpanel.parser.formats.tv import TV

VOCABULARIES: dict[str, FormatVocabulary] = {
    vocabulary.name: vocabulary for vocabulary in (COMIC, SCREENPLAY, STAGE_PLAY, TV)
}


def available_formats() -> list[str]:
    """Names of every registered script format."""
    return list(VOCABULARIES)


def get_vocabulary(script_format: str) -> FormatVocabulary:
    """Look up the vocabulary for a format name.

    Args:
        script_format: Format name or alias ("comic", "stage-play", "tv", ...)

    Returns:
        The registered vocabulary

    Raises:
        UnsupportedFormatError: If no vocabulary is registered under the name
    """
    vocabulary = VOCABULARIES.get(normalize_format_name(script_format))
    if vocabulary is None:
        raise UnsupportedFormatError(script_format, available_formats())
    return vocabulary


__all__ = [
    "COMIC",
    "SCREENPLAY",
    "STAGE_PLAY",
    "TV",
    "VOCABULARIES",
    "ClassifierContext",
    "FormatVocabulary",
    "Recognizer",
    "available_formats",
    "get_vocabulary",
]
