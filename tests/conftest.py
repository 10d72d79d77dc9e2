"""
Shared test fixtures for the certno test suite.

Provides reference identifiers used across codec, formatting and
assignment tests.
"""

from __future__ import annotations

import pytest

from certno.domain.models import CertificateIdentifier


@pytest.fixture()
def full_identifier() -> CertificateIdentifier:
    """Book I, volume 1-C/2024, serial 16/2025, page 21 — both optional years present."""
    return CertificateIdentifier(
        book_number="I",
        volume_number="1",
        volume_letter="C",
        volume_year="2024",
        serial_number="16",
        serial_year="2025",
        page_number="21",
    )


@pytest.fixture()
def required_only_identifier() -> CertificateIdentifier:
    """Book I, volume 1-C, serial 16, page 21 — no years."""
    return CertificateIdentifier(
        book_number="I",
        volume_number="1",
        volume_letter="C",
        serial_number="16",
        page_number="21",
    )
