"""
Compact decoder — the current delimiter-free certificate number.

    WBMSDBRW | V | 5 | C | 2025 | 257 | 2026 | 599
    tag       book vol letter volYear serial serialYear page

Book, volume digits and volume letter are delimited by their character
classes. Everything after the letter is one unlabelled digit run holding
[volYear] serial [serialYear] page, and its boundaries are assigned by
the heuristic below. It is a policy, not an inverse of the encoder: two
different field combinations can concatenate to the same run. The same
constants drive `certno.codec.round_trips`, which is how callers learn
that a number they are about to mint would not decode back.

Digit-run heuristic, first match wins (L = length of the run):
  1. L >= YEAR_PATTERN_MIN_LENGTH and the first four digits are a
     plausible year: volume year, then a 1..MAX_SERIAL_DIGITS_BEFORE_YEAR
     digit serial (longest first), a plausible four-digit serial year,
     and at least one page digit.
  2. L >= YEAR_SPLIT_MIN_LENGTH and the first four digits are a plausible
     year: volume year, then the rest split in half, serial taking the
     larger half.
  3. No leading year: the page takes the last max(1, min(MAX_PAGE_DIGITS,
     L // 2)) digits and the serial the rest.
"""

from __future__ import annotations

import re

import structlog
from railway import ErrorCode
from railway.result import Result

from certno.domain.models import COMPACT_PREFIX, CertificateIdentifier

log = structlog.get_logger()

PLAUSIBLE_YEAR_MIN = 1900
PLAUSIBLE_YEAR_MAX = 2099
YEAR_DIGITS = 4
YEAR_PATTERN_MIN_LENGTH = 8
YEAR_SPLIT_MIN_LENGTH = 6
MAX_SERIAL_DIGITS_BEFORE_YEAR = 3
MAX_PAGE_DIGITS = 3
MIN_DIGIT_RUN = 2

# With no letter after the volume digits, volume and serial run together;
# the volume then keeps exactly this many leading digits.
LETTERLESS_VOLUME_DIGITS = 1

_BOOK_RUN = re.compile(r"[IVXLCDM]+")
_DIGIT_RUN = re.compile(r"[0-9]+")
_LETTER_RUN = re.compile(r"[A-Za-z]*")
_ALL_DIGITS = re.compile(r"[0-9]*")


def is_plausible_year(digits: str) -> bool:
    """Four ASCII digits between PLAUSIBLE_YEAR_MIN and PLAUSIBLE_YEAR_MAX."""
    if len(digits) != YEAR_DIGITS or not _ALL_DIGITS.fullmatch(digits):
        return False
    return PLAUSIBLE_YEAR_MIN <= int(digits) <= PLAUSIBLE_YEAR_MAX


def split_digit_run(digits: str) -> tuple[str, str, str, str] | None:
    """
    Assign boundaries inside the trailing digit run.

    Returns (volume_year, serial_number, serial_year, page_number), or None
    when the run is too short to hold both a serial and a page.
    """
    length = len(digits)
    if length < MIN_DIGIT_RUN:
        return None

    leading_year = digits[:YEAR_DIGITS]
    if length >= YEAR_SPLIT_MIN_LENGTH and is_plausible_year(leading_year):
        rest = digits[YEAR_DIGITS:]
        if length >= YEAR_PATTERN_MIN_LENGTH:
            for serial_len in range(MAX_SERIAL_DIGITS_BEFORE_YEAR, 0, -1):
                serial_year = rest[serial_len:serial_len + YEAR_DIGITS]
                page = rest[serial_len + YEAR_DIGITS:]
                if page and is_plausible_year(serial_year):
                    return leading_year, rest[:serial_len], serial_year, page
        half = (len(rest) + 1) // 2
        return leading_year, rest[:half], "", rest[half:]

    page_len = max(1, min(MAX_PAGE_DIGITS, length // 2))
    return "", digits[:-page_len], "", digits[-page_len:]


def decode_compact(text: str) -> Result[CertificateIdentifier]:
    """
    Decode a delimiter-free certificate number.

    Returns Result.failure(VALIDATION_ERROR, ...) when the book numeral or
    volume digits are missing, when anything but digits follows the volume
    letter, or when the digit run is shorter than MIN_DIGIT_RUN.
    """
    if not text.startswith(COMPACT_PREFIX):
        return _malformed("missing authority tag", text)
    body = text[len(COMPACT_PREFIX):]

    book_match = _BOOK_RUN.match(body)
    if book_match is None:
        return _malformed("missing book numeral", text)
    book = book_match.group()
    pos = book_match.end()

    volume_match = _DIGIT_RUN.match(body, pos)
    if volume_match is None:
        return _malformed("missing volume number", text)
    volume = volume_match.group()
    pos = volume_match.end()

    letter = _LETTER_RUN.match(body, pos).group()  # type: ignore[union-attr]
    pos += len(letter)
    if not letter and pos == len(body):
        volume, digits = volume[:LETTERLESS_VOLUME_DIGITS], volume[LETTERLESS_VOLUME_DIGITS:]
    else:
        digits = body[pos:]
        if not _ALL_DIGITS.fullmatch(digits):
            return _malformed("unexpected characters after volume letter", text)

    fields = split_digit_run(digits)
    if fields is None:
        return _malformed("digit run too short for serial and page", text)
    volume_year, serial, serial_year, page = fields

    log.debug(
        "compact.split",
        digits=digits,
        volume_year=volume_year,
        serial_number=serial,
        serial_year=serial_year,
        page_number=page,
    )
    return CertificateIdentifier.create(
        book_number=book,
        volume_number=volume,
        volume_letter=letter,
        volume_year=volume_year,
        serial_number=serial,
        serial_year=serial_year,
        page_number=page,
    )


def _malformed(reason: str, text: str) -> Result[CertificateIdentifier]:
    return Result.failure(ErrorCode.VALIDATION_ERROR, f"Malformed compact number ({reason}): {text!r}")
