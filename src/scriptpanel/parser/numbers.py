"""Normalization of word-form, roman-numeral and decimal numbers."""

from __future__ import annotations

import re

_UNITS = (
    "one",
    "two",
    "three",
    "four",
    "five",
    "six",
    "seven",
    "eight",
    "nine",
)

_WORD_NUMBERS: dict[str, int] = {
    **{word: index + 1 for index, word in enumerate(_UNITS)},
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "thirteen": 13,
    "fourteen": 14,
    "fifteen": 15,
    "sixteen": 16,
    "seventeen": 17,
    "eighteen": 18,
    "nineteen": 19,
    "twenty": 20,
    # twenty-one .. twenty-eight, stored without separators
    **{f"twenty{word}": 21 + index for index, word in enumerate(_UNITS[:8])},
}

_ROMAN_NUMERALS: dict[str, int] = {
    "i": 1,
    "ii": 2,
    "iii": 3,
    "iv": 4,
    "v": 5,
    "vi": 6,
    "vii": 7,
    "viii": 8,
    "ix": 9,
    "x": 10,
}

_SEPARATORS = re.compile(r"[-\s]+")
_DECIMAL = re.compile(r"^\d+$")

# Alternation used inside marker patterns, longest compound words first so
# "TWENTY ONE" is not cut short at "TWENTY".
WORD_NUMBER_PATTERN = (
    r"TWENTY[- ]?(?:ONE|TWO|THREE|FOUR|FIVE|SIX|SEVEN|EIGHT)|"
    r"ELEVEN|TWELVE|THIRTEEN|FOURTEEN|FIFTEEN|SIXTEEN|SEVENTEEN|EIGHTEEN|"
    r"NINETEEN|TWENTY|ONE|TWO|THREE|FOUR|FIVE|SIX|SEVEN|EIGHT|NINE|TEN"
)
ROMAN_NUMBER_PATTERN = r"X|IX|VIII|VII|VI|V|IV|III|II|I"


def word_key(token: str) -> str:
    """Lower-case a token and drop hyphens and whitespace."""
    return _SEPARATORS.sub("", token.strip().lower())


def normalize_number(token: str, *, roman_limit: int = 10) -> int:
    """Convert a number token to an integer.

    Tries, in order, the word table ("fourteen", "twenty-one",
    "Twenty One"), roman numerals up to ``roman_limit`` and plain decimals.

    Args:
        token: The raw token taken from a marker line
        roman_limit: Largest roman numeral accepted (0 disables roman numerals)

    Returns:
        The integer value, or 0 when the token is not a number. Callers treat
        0 as "unknown".
    """
    if not token:
        return 0

    key = word_key(token)
    if key in _WORD_NUMBERS:
        return _WORD_NUMBERS[key]

    roman = _ROMAN_NUMERALS.get(key)
    if roman is not None and roman <= roman_limit:
        return roman

    if _DECIMAL.match(key):
        return int(key)

    return 0
