"""
Unit tests for domain models — the certificate identifier value object.

Verifies frozen dataclass behavior, the zero value used as the decode
fallback, and field validation in the `create` factory.
"""

from __future__ import annotations

from dataclasses import replace

import pytest
from railway import ErrorCode, ResultAssertions

from certno.domain.models import (
    AUTHORITY_CODE,
    COMPACT_PREFIX,
    DELIMITED_PREFIX,
    CertificateIdentifier,
)


class TestCertificateIdentifier:
    """Verify CertificateIdentifier value object behavior."""

    def test_zero_value(self) -> None:
        """
        GIVEN a CertificateIdentifier with no arguments
        WHEN created
        THEN book is "I" and every other field is empty.
        """
        ident = CertificateIdentifier()
        assert ident.book_number == "I"
        assert ident.volume_number == ""
        assert ident.volume_letter == ""
        assert ident.volume_year == ""
        assert ident.serial_number == ""
        assert ident.serial_year == ""
        assert ident.page_number == ""
        assert ident.authority_code == ("WB", "MSD", "BRW")

    def test_frozen_prevents_mutation(self, full_identifier: CertificateIdentifier) -> None:
        """
        GIVEN a frozen CertificateIdentifier
        WHEN attempting to modify a field
        THEN AttributeError is raised.
        """
        with pytest.raises(AttributeError):
            full_identifier.page_number = "22"  # type: ignore[misc]

    def test_equality_is_by_value(self, full_identifier: CertificateIdentifier) -> None:
        copy = CertificateIdentifier(
            book_number="I",
            volume_number="1",
            volume_letter="C",
            volume_year="2024",
            serial_number="16",
            serial_year="2025",
            page_number="21",
        )
        assert copy == full_identifier
        assert hash(copy) == hash(full_identifier)

    def test_is_complete_requires_volume_serial_page(self, required_only_identifier: CertificateIdentifier) -> None:
        """
        GIVEN identifiers with and without required fields
        WHEN is_complete is read
        THEN only the one with volume, serial and page is complete.
        """
        assert required_only_identifier.is_complete
        assert not CertificateIdentifier(volume_number="1", serial_number="16").is_complete
        assert not CertificateIdentifier().is_complete

    def test_authority_code_is_fixed(self, full_identifier: CertificateIdentifier) -> None:
        """
        GIVEN the issuing-authority tag
        WHEN constructing an identifier with another tag
        THEN construction is refused and copies keep the fixed tag.
        """
        with pytest.raises(TypeError):
            CertificateIdentifier(authority_code=("X", "Y", "Z"))  # type: ignore[call-arg]
        assert replace(full_identifier, page_number="22").authority_code == AUTHORITY_CODE

    def test_prefixes(self) -> None:
        assert AUTHORITY_CODE == ("WB", "MSD", "BRW")
        assert DELIMITED_PREFIX == "WB-MSD-BRW"
        assert COMPACT_PREFIX == "WBMSDBRW"


class TestCreate:
    """Verify field validation in CertificateIdentifier.create."""

    def test_valid_fields(self, full_identifier: CertificateIdentifier) -> None:
        """
        GIVEN all fields with valid values
        WHEN create is called
        THEN the Result holds an equal identifier.
        """
        result = CertificateIdentifier.create(
            book_number="I",
            volume_number="1",
            volume_letter="C",
            volume_year="2024",
            serial_number="16",
            serial_year="2025",
            page_number="21",
        )
        assert ResultAssertions.assert_success(result) == full_identifier

    def test_empty_book_defaults_to_one(self) -> None:
        result = CertificateIdentifier.create(volume_number="1", serial_number="16", page_number="21")
        assert ResultAssertions.assert_success(result).book_number == "I"

    def test_optional_fields_may_be_empty(self) -> None:
        result = CertificateIdentifier.create(
            book_number="XLIV", volume_number="3", serial_number="7", page_number="9"
        )
        ident = ResultAssertions.assert_success(result)
        assert ident.volume_letter == ""
        assert ident.volume_year == ""
        assert ident.serial_year == ""

    @pytest.mark.parametrize(
        "overrides,fragment",
        [
            ({"book_number": "IIII"}, "book"),
            ({"book_number": "LI"}, "book"),
            ({"volume_number": ""}, "volume number"),
            ({"volume_number": "1a"}, "volume number"),
            ({"serial_number": ""}, "serial number"),
            ({"page_number": "²"}, "page number"),
            ({"volume_letter": "C1"}, "volume letter"),
            ({"volume_year": "24"}, "volume year"),
            ({"serial_year": "20255"}, "serial year"),
        ],
    )
    def test_invalid_field_rejected(self, overrides: dict[str, str], fragment: str) -> None:
        """
        GIVEN one invalid field
        WHEN create is called
        THEN Result.failure(VALIDATION_ERROR) names the field.
        """
        fields = {
            "book_number": "I",
            "volume_number": "1",
            "volume_letter": "C",
            "volume_year": "2024",
            "serial_number": "16",
            "serial_year": "2025",
            "page_number": "21",
        }
        fields.update(overrides)
        result = CertificateIdentifier.create(**fields)
        ResultAssertions.assert_failure(result, ErrorCode.VALIDATION_ERROR)
        ResultAssertions.assert_failure_message_contains(result, fragment)
