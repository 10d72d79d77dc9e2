"""
Display fields for certificate issuance.

The certificate template prints the register location as text, e.g.
"Volume 1-C/2024, Serial 16/2025, Page 21", from a stored number of any
generation.
"""

from __future__ import annotations

from typing import Any

from certno.codec import decode
from certno.detection import detect_format
from certno.domain.models import CertificateIdentifier, IdentifierFormat
from certno.numerals import from_roman


def describe(identifier: CertificateIdentifier) -> str:
    """Register location as text; absent letter and years are left out."""
    volume = identifier.volume_number
    if identifier.volume_letter:
        volume += f"-{identifier.volume_letter}"
    if identifier.volume_year:
        volume += f"/{identifier.volume_year}"
    serial = identifier.serial_number
    if identifier.serial_year:
        serial += f"/{identifier.serial_year}"
    return f"Volume {volume}, Serial {serial}, Page {identifier.page_number}"


def certificate_fields(certificate_number: str | None) -> dict[str, Any]:
    """
    Decode a stored number into the fields the certificate template needs.

    Malformed numbers produce the default identifier's fields, so the
    template always renders.
    """
    return identifier_fields(decode(certificate_number), detect_format(certificate_number))


def identifier_fields(identifier: CertificateIdentifier, number_format: IdentifierFormat) -> dict[str, Any]:
    """Template fields for an identifier that has already been decoded."""
    return {
        "format": number_format.value,
        "book_number": identifier.book_number,
        "book_index": from_roman(identifier.book_number),
        "volume_number": identifier.volume_number,
        "volume_letter": identifier.volume_letter,
        "volume_year": identifier.volume_year,
        "serial_number": identifier.serial_number,
        "serial_year": identifier.serial_year,
        "page_number": identifier.page_number,
        "description": describe(identifier) if identifier.is_complete else "",
    }
