"""
Domain models — the certificate identifier value object.

A certificate number encodes where a verified marriage registration is
recorded in the register: book (Roman numeral), volume, optional volume
letter and year, serial, optional serial year, and page.

CertificateIdentifier is a frozen dataclass. Every decode or re-encode
produces a new value; nothing is mutated in place. Field validation
lives in the `create` factory and returns a Result, so decoders can chain
it on the railway instead of raising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, unique

from railway import ErrorCode
from railway.result import Result

from certno.numerals import is_book_numeral

AUTHORITY_CODE: tuple[str, str, str] = ("WB", "MSD", "BRW")
"""Issuing-authority tag: state, district registrar office, registration office."""

SEPARATOR = "-"
DELIMITED_PREFIX = SEPARATOR.join(AUTHORITY_CODE)
COMPACT_PREFIX = "".join(AUTHORITY_CODE)
DEFAULT_BOOK_NUMBER = "I"

_DIGITS = re.compile(r"[0-9]+")
_LETTERS = re.compile(r"[A-Za-z]+")
_YEAR = re.compile(r"[0-9]{4}")


@unique
class IdentifierFormat(Enum):
    """Syntactic generation of a certificate number string."""

    DELIMITED = "DELIMITED"
    """Hyphen-separated: `WB-MSD-BRW-I-1-C-2024-16-2025-21` and older `--` forms."""

    COMPACT = "COMPACT"
    """Current delimiter-free form: `WBMSDBRWI1C202416202521`."""

    UNRECOGNIZED = "UNRECOGNIZED"


@dataclass(frozen=True, slots=True)
class CertificateIdentifier:
    """
    Structured certificate number.

    All fields are strings; empty string means "absent". The zero value
    (`CertificateIdentifier()`) is the decode fallback: book "I" and
    every other field empty.
    """

    book_number: str = DEFAULT_BOOK_NUMBER
    volume_number: str = ""
    volume_letter: str = ""
    volume_year: str = ""
    serial_number: str = ""
    serial_year: str = ""
    page_number: str = ""
    authority_code: tuple[str, str, str] = field(default=AUTHORITY_CODE, init=False, repr=False)

    @property
    def is_complete(self) -> bool:
        """True when volume, serial and page numbers are all present."""
        return bool(self.volume_number and self.serial_number and self.page_number)

    @staticmethod
    def create(
        *,
        book_number: str = "",
        volume_number: str = "",
        volume_letter: str = "",
        volume_year: str = "",
        serial_number: str = "",
        serial_year: str = "",
        page_number: str = "",
    ) -> Result[CertificateIdentifier]:
        """
        Validate raw field strings into a complete identifier.

        An empty book number means book "I". Returns
        Result.failure(VALIDATION_ERROR, ...) naming the first bad field.
        """
        book = book_number or DEFAULT_BOOK_NUMBER
        if not is_book_numeral(book):
            return _invalid(f"Book number is not a numeral I..L: {book!r}")
        for label, value in (
            ("Volume number", volume_number),
            ("Serial number", serial_number),
            ("Page number", page_number),
        ):
            if not _DIGITS.fullmatch(value):
                return _invalid(f"{label} must be one or more digits, got {value!r}")
        if volume_letter and not _LETTERS.fullmatch(volume_letter):
            return _invalid(f"Volume letter must be alphabetic, got {volume_letter!r}")
        for label, value in (("Volume year", volume_year), ("Serial year", serial_year)):
            if value and not _YEAR.fullmatch(value):
                return _invalid(f"{label} must be four digits, got {value!r}")
        return Result.success(
            CertificateIdentifier(
                book_number=book,
                volume_number=volume_number,
                volume_letter=volume_letter,
                volume_year=volume_year,
                serial_number=serial_number,
                serial_year=serial_year,
                page_number=page_number,
            )
        )


def _invalid(message: str) -> Result[CertificateIdentifier]:
    return Result.failure(ErrorCode.VALIDATION_ERROR, message)
