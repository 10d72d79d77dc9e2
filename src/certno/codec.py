"""
Certificate number codec — encode the compact form, decode any generation.

    parse(text)    → Result[CertificateIdentifier]   (reason on failure)
    decode(text)   → CertificateIdentifier           (total, never raises)
    encode(ident)  → str                             ("" until complete)

`decode` is `parse` recovered to the zero-value identifier: this is the
single error-recovery path, so callers rendering a stored or hand-typed
number always get something displayable and never a partial result.

Only the compact generation is ever encoded. Delimited numbers are
decoded for backward compatibility with previously issued certificates.
"""

from __future__ import annotations

from dataclasses import replace

import structlog
from railway import ErrorCode
from railway.result import Result

from certno.compact import decode_compact
from certno.delimited import decode_delimited
from certno.detection import detect_format
from certno.domain.models import (
    COMPACT_PREFIX,
    DEFAULT_BOOK_NUMBER,
    SEPARATOR,
    CertificateIdentifier,
    IdentifierFormat,
)

log = structlog.get_logger()

DEFAULT_IDENTIFIER = CertificateIdentifier()


def parse(text: str | None) -> Result[CertificateIdentifier]:
    """
    Decode a certificate number of any generation, reporting why it failed.

    Never raises: unexpected exceptions from the decoders are captured as
    Result.failure(TECHNICAL_ERROR, ...).
    """
    match detect_format(text):
        case IdentifierFormat.DELIMITED:
            decoder = decode_delimited
        case IdentifierFormat.COMPACT:
            decoder = decode_compact
        case _:
            return Result.failure(
                ErrorCode.VALIDATION_ERROR,
                f"Unrecognized certificate number: {text!r}",
            )
    stripped = text.strip()  # type: ignore[union-attr]
    return Result.from_computation(
        lambda: decoder(stripped),
        ErrorCode.TECHNICAL_ERROR,
        f"Certificate number decoder crashed on {stripped!r}",
    ).flat_map(lambda decoded: decoded)


def decode(text: str | None) -> CertificateIdentifier:
    """Decode any generation; malformed input yields DEFAULT_IDENTIFIER."""
    return (
        parse(text)
        .peek_failure(lambda err: log.debug("codec.decode_failed", reason=err.message))
        .get_or_else(DEFAULT_IDENTIFIER)
    )


def encode(identifier: CertificateIdentifier) -> str:
    """
    Build the compact certificate number.

    Fields are concatenated with no separators; absent optional fields
    are omitted. Returns "" while volume, serial or page number is empty,
    so a live preview can stay blank until the form is complete.
    """
    if not identifier.is_complete:
        return ""
    return "".join(
        (
            COMPACT_PREFIX,
            identifier.book_number or DEFAULT_BOOK_NUMBER,
            identifier.volume_number,
            identifier.volume_letter,
            identifier.volume_year,
            identifier.serial_number,
            identifier.serial_year,
            identifier.page_number,
        )
    )


def canonicalize(text: str | None) -> str:
    """Re-encode a number of any generation in compact form, or "" if unparseable."""
    return parse(text).map(encode).get_or_else("")


def lookup_key(text: str) -> str:
    """
    Exact-match key for verification lookups.

    Stored numbers are compact; users may still type the hyphenated form,
    so the key drops every separator rather than re-segmenting fields.
    """
    return text.strip().replace(SEPARATOR, "")


def round_trips(identifier: CertificateIdentifier) -> bool:
    """
    True when `decode(encode(identifier))` gives the identifier back.

    False for incomplete identifiers and for field lengths inside the
    ambiguous zone of the compact digit-run heuristic.
    """
    number = encode(identifier)
    if not number:
        return False
    expected = replace(identifier, book_number=identifier.book_number or DEFAULT_BOOK_NUMBER)
    return decode(number) == expected
