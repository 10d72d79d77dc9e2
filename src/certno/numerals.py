"""
Roman numerals for register book numbers.

Books are numbered I..L (1..50). The canonical spelling uses the
subtractive forms (IV, IX, XL), so every book has exactly one valid
numeral and "IIII" or "VX" are rejected.
"""

from __future__ import annotations

MAX_BOOK_NUMBER = 50

# Subtractive value table, largest first. L is the largest symbol a
# book number up to 50 ever needs.
_VALUES: tuple[tuple[int, str], ...] = (
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)


def to_roman(number: int) -> str:
    """
    Spell a book number as a canonical Roman numeral.

    Raises ValueError outside 1..MAX_BOOK_NUMBER.
    """
    if not 1 <= number <= MAX_BOOK_NUMBER:
        raise ValueError(f"Book number must be between 1 and {MAX_BOOK_NUMBER}, got {number}")
    remaining = number
    numeral = ""
    for value, symbol in _VALUES:
        while remaining >= value:
            numeral += symbol
            remaining -= value
    return numeral


BOOK_NUMERALS: tuple[str, ...] = tuple(to_roman(n) for n in range(1, MAX_BOOK_NUMBER + 1))

_NUMERAL_TO_NUMBER: dict[str, int] = {numeral: n for n, numeral in enumerate(BOOK_NUMERALS, start=1)}


def from_roman(numeral: str) -> int | None:
    """Return the book number for a canonical numeral, or None."""
    return _NUMERAL_TO_NUMBER.get(numeral)


def is_book_numeral(numeral: str) -> bool:
    return numeral in _NUMERAL_TO_NUMBER
