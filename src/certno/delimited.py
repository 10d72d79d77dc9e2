"""
Delimited decoder — hyphen-separated certificate numbers.

Two older generations share the separator grammar. Segment counts below
include the three authority segments (WB, MSD, BRW):

  8  WB-MSD-BRW-book-vol-letter-serial-page
  9  WB-MSD-BRW-book-vol-letter-volYear-serial-page
     WB-MSD-BRW-book-vol-letter-serial-serialYear-page
  10 WB-MSD-BRW-book-vol-letter-volYear-serial-serialYear-page
     (the fixed-arity legacy form writes absent years as empty segments,
      e.g. WB-MSD-BRW-I-1-C--16--21)
  11+ legacy rows with doubled separators; positions 3..9 are read with
      the 10-segment mapping and the tail is ignored

Nine segments are ambiguous: the segment after the volume letter is a
volume year when it is exactly four digits, otherwise it is the serial
number and the serial year follows it.
"""

from __future__ import annotations

import re

import structlog
from railway import ErrorCode
from railway.result import Result

from certno.domain.models import AUTHORITY_CODE, SEPARATOR, CertificateIdentifier

log = structlog.get_logger()

_YEAR = re.compile(r"[0-9]{4}")

_BASE_SEGMENTS = 8
_ONE_OPTIONAL_SEGMENTS = 9
_FULL_SEGMENTS = 10


def decode_delimited(text: str) -> Result[CertificateIdentifier]:
    """
    Decode a hyphen-separated certificate number.

    Returns Result.failure(VALIDATION_ERROR, ...) for a wrong authority
    tag, an unsupported segment count, or fields that fail validation.
    """
    parts = text.split(SEPARATOR)
    if tuple(parts[:3]) != AUTHORITY_CODE:
        return Result.failure(ErrorCode.VALIDATION_ERROR, f"Missing authority tag: {text!r}")

    count = len(parts)
    if count == _BASE_SEGMENTS:
        book, volume, letter, serial, page = parts[3:8]
        return CertificateIdentifier.create(
            book_number=book,
            volume_number=volume,
            volume_letter=letter,
            serial_number=serial,
            page_number=page,
        )

    if count == _ONE_OPTIONAL_SEGMENTS:
        book, volume, letter, candidate, following, page = parts[3:9]
        if _YEAR.fullmatch(candidate):
            return CertificateIdentifier.create(
                book_number=book,
                volume_number=volume,
                volume_letter=letter,
                volume_year=candidate,
                serial_number=following,
                page_number=page,
            )
        return CertificateIdentifier.create(
            book_number=book,
            volume_number=volume,
            volume_letter=letter,
            serial_number=candidate,
            serial_year=following,
            page_number=page,
        )

    if count >= _FULL_SEGMENTS:
        if count > _FULL_SEGMENTS:
            log.debug("delimited.legacy_fallback", segments=count)
        book, volume, letter, volume_year, serial, serial_year, page = parts[3:10]
        return CertificateIdentifier.create(
            book_number=book,
            volume_number=volume,
            volume_letter=letter,
            volume_year=volume_year,
            serial_number=serial,
            serial_year=serial_year,
            page_number=page,
        )

    return Result.failure(
        ErrorCode.VALIDATION_ERROR,
        f"Unsupported segment count {count} in {text!r}",
    )
