"""Entry points that run the classify / accumulate / assemble pipeline."""

from __future__ import annotations

import re
from collections.abc import Iterator
from pathlib import Path

from scriptpanel.config import ScriptPanelSettings, get_logger, get_settings
from scriptpanel.exceptions import ParseError
from scriptpanel.parser.accumulator import Accumulator
from scriptpanel.parser.assembler import assemble_result
from scriptpanel.parser.classifier import classify_line
from scriptpanel.parser.formats import FormatVocabulary, get_vocabulary
from scriptpanel.parser.models import ParseResult

logger = get_logger(__name__)

_NEWLINES = re.compile(r"\r\n?")


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` line endings to ``\\n``."""
    return _NEWLINES.sub("\n", text)


def iter_lines(text: str) -> Iterator[tuple[str, int, int]]:
    """Yield each line of normalized text with its start and end offsets."""
    offset = 0
    for line in text.split("\n"):
        end = offset + len(line)
        yield line, offset, end
        offset = end + 1


def run_pipeline(text: str, vocabulary: FormatVocabulary) -> ParseResult:
    """Classify and fold every line of ``text``, then assemble the result.

    Args:
        text: Script text with normalized newlines
        vocabulary: Pattern table of the script format

    Returns:
        The assembled parse result
    """
    accumulator = Accumulator(vocabulary)
    for raw_line, start, end in iter_lines(text):
        parsed = classify_line(raw_line, vocabulary, accumulator.context())
        accumulator.feed(parsed, (start, end))
    return assemble_result(accumulator.finish(), vocabulary)


def parse_script(
    text: str,
    script_format: str = "comic",
    *,
    max_chars: int | None = None,
) -> ParseResult:
    """Parse a script into pages, panels, dialogue and a character roster.

    Parsing never raises for bad input: structural problems and unexpected
    faults are reported through ``ParseResult.errors`` with
    ``success=False``.

    Args:
        text: Raw script text
        script_format: "comic", "screenplay", "stage_play" or "tv"
        max_chars: Reject longer scripts with an error result

    Returns:
        The parse result

    Raises:
        UnsupportedFormatError: If ``script_format`` is not a known format
    """
    vocabulary = get_vocabulary(script_format)
    text = normalize_newlines(text)

    if max_chars is not None and len(text) > max_chars:
        logger.warning(
            "Script exceeds size limit",
            length=len(text),
            max_chars=max_chars,
        )
        return ParseResult(
            success=False,
            errors=[
                f"Script is too long ({len(text)} characters, limit {max_chars})"
            ],
            script_format=vocabulary.name,
        )

    try:
        result = run_pipeline(text, vocabulary)
    except Exception as e:
        logger.exception("Parser exception", script_format=vocabulary.name)
        return ParseResult(
            success=False,
            errors=[f"Parser exception: {e}"],
            script_format=vocabulary.name,
        )

    logger.debug(
        f"Parsed {vocabulary.name} script",
        pages=len(result.pages),
        panels=result.panel_count,
        characters=len(result.characters),
        warnings=len(result.warnings),
    )
    return result


class ScriptParser:
    """Settings-aware parser used by the CLI."""

    def __init__(self, settings: ScriptPanelSettings | None = None) -> None:
        """Initialize the parser.

        Args:
            settings: Configuration settings (uses the global settings if omitted)
        """
        self.settings = settings or get_settings()

    def parse(self, content: str, script_format: str | None = None) -> ParseResult:
        """Parse script text.

        Args:
            content: Raw script text
            script_format: Format name, defaults to ``settings.default_format``

        Returns:
            The parse result
        """
        return parse_script(
            content,
            script_format or self.settings.default_format,
            max_chars=self.settings.max_script_chars,
        )

    def parse_file(
        self, file_path: Path, script_format: str | None = None
    ) -> ParseResult:
        """Read and parse a script file.

        Args:
            file_path: Path to a UTF-8 text file
            script_format: Format name, defaults to ``settings.default_format``

        Returns:
            The parse result

        Raises:
            ParseError: If the file cannot be read as UTF-8 text
        """
        logger.debug(f"Parsing script file: {file_path}")
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read script file: {e}")
            raise ParseError(
                message=f"Failed to read script file: {file_path}",
                hint="Check that the file exists and is UTF-8 encoded text.",
                details={"file": str(file_path), "error": str(e)},
            ) from e

        result = self.parse(content, script_format)
        logger.info(
            f"Parsed '{file_path.name}' with {len(result.pages)} pages "
            f"and {result.panel_count} panels"
        )
        return result
