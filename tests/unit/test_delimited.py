"""
Unit tests for the delimited decoder.

Covers every supported segment count, the nine-segment year/serial
ambiguity, and the legacy fixed-arity form with empty year segments.
"""

from __future__ import annotations

import pytest
from railway import ErrorCode, ResultAssertions

from certno.delimited import decode_delimited
from certno.domain.models import CertificateIdentifier


class TestSegmentCounts:
    """Verify field mapping per segment count."""

    def test_ten_segments(self, full_identifier: CertificateIdentifier) -> None:
        """
        GIVEN a fully populated hyphenated number
        WHEN decoded
        THEN all seven fields are mapped positionally.
        """
        result = decode_delimited("WB-MSD-BRW-I-1-C-2024-16-2025-21")
        assert ResultAssertions.assert_success(result) == full_identifier

    def test_eight_segments(self, required_only_identifier: CertificateIdentifier) -> None:
        """
        GIVEN a hyphenated number with no years
        WHEN decoded
        THEN book, volume, letter, serial and page are set.
        """
        result = decode_delimited("WB-MSD-BRW-I-1-C-16-21")
        assert ResultAssertions.assert_success(result) == required_only_identifier

    def test_nine_segments_with_volume_year(self) -> None:
        """
        GIVEN nine segments where the seventh is four digits
        WHEN decoded
        THEN it is read as the volume year.
        """
        ident = ResultAssertions.assert_success(decode_delimited("WB-MSD-BRW-I-1-C-2024-16-21"))
        assert ident.volume_year == "2024"
        assert ident.serial_number == "16"
        assert ident.serial_year == ""
        assert ident.page_number == "21"

    def test_nine_segments_with_serial_year(self) -> None:
        """
        GIVEN nine segments where the seventh is not four digits
        WHEN decoded
        THEN it is the serial and the next segment is the serial year.
        """
        ident = ResultAssertions.assert_success(decode_delimited("WB-MSD-BRW-I-1-C-16-2025-21"))
        assert ident.volume_year == ""
        assert ident.serial_number == "16"
        assert ident.serial_year == "2025"
        assert ident.page_number == "21"

    def test_nine_segments_four_digit_serial_reads_as_year(self) -> None:
        """
        GIVEN nine segments where a four-digit serial precedes a serial year
        WHEN decoded
        THEN the four-digit segment is taken as the volume year.
        """
        ident = ResultAssertions.assert_success(decode_delimited("WB-MSD-BRW-I-1-C-1234-2025-21"))
        assert ident.volume_year == "1234"
        assert ident.serial_number == "2025"
        assert ident.serial_year == ""

    def test_legacy_empty_year_segments(self, required_only_identifier: CertificateIdentifier) -> None:
        """
        GIVEN the fixed-arity legacy form with empty year segments
        WHEN decoded
        THEN the years are empty and the remaining fields are set.
        """
        result = decode_delimited("WB-MSD-BRW-I-1-C--16--21")
        assert ResultAssertions.assert_success(result) == required_only_identifier

    def test_more_than_ten_segments_ignores_tail(self, full_identifier: CertificateIdentifier) -> None:
        """
        GIVEN a legacy row with trailing doubled separators
        WHEN decoded
        THEN positions after the page are ignored.
        """
        result = decode_delimited("WB-MSD-BRW-I-1-C-2024-16-2025-21--")
        assert ResultAssertions.assert_success(result) == full_identifier

    def test_empty_book_defaults_to_one(self) -> None:
        ident = ResultAssertions.assert_success(decode_delimited("WB-MSD-BRW--1-C-16-21"))
        assert ident.book_number == "I"

    def test_missing_volume_letter_allowed(self) -> None:
        ident = ResultAssertions.assert_success(decode_delimited("WB-MSD-BRW-XIV-3--7-9"))
        assert ident.book_number == "XIV"
        assert ident.volume_letter == ""


class TestRejections:
    """Verify failure cases."""

    @pytest.mark.parametrize(
        "text",
        ["WB-MSD-BRW", "WB-MSD-BRW-I-1-C-16", "WB-MSD-BRW-I-1"],
    )
    def test_unsupported_segment_count(self, text: str) -> None:
        """
        GIVEN fewer than eight segments
        WHEN decoded
        THEN Result.failure(VALIDATION_ERROR) reports the count.
        """
        result = decode_delimited(text)
        ResultAssertions.assert_failure(result, ErrorCode.VALIDATION_ERROR)
        ResultAssertions.assert_failure_message_contains(result, "segment count")

    def test_wrong_authority_tag(self) -> None:
        result = decode_delimited("WB-MSD-XYZ-I-1-C-16-21")
        ResultAssertions.assert_failure_message_contains(result, "authority tag")

    def test_missing_serial_in_nine_segments(self) -> None:
        """
        GIVEN nine segments with a volume year but an empty serial
        WHEN decoded
        THEN the serial validation fails.
        """
        result = decode_delimited("WB-MSD-BRW-I-1-C-2024--21")
        ResultAssertions.assert_failure_message_contains(result, "serial number")

    def test_non_year_serial_year_rejected(self) -> None:
        result = decode_delimited("WB-MSD-BRW-I-1-C-16-25-21")
        ResultAssertions.assert_failure(result, ErrorCode.VALIDATION_ERROR)

    def test_non_canonical_book_rejected(self) -> None:
        result = decode_delimited("WB-MSD-BRW-IIII-1-C-16-21")
        ResultAssertions.assert_failure_message_contains(result, "book")
