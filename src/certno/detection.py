"""
Format detection — classify a certificate number string by generation.

Purely syntactic: two prefix tests on the stripped input, so detection
is linear in the input length and never backtracks.
"""

from __future__ import annotations

from certno.domain.models import COMPACT_PREFIX, DELIMITED_PREFIX, SEPARATOR, IdentifierFormat


def detect_format(text: str | None) -> IdentifierFormat:
    """
    Classify `text` as DELIMITED, COMPACT or UNRECOGNIZED.

    DELIMITED needs the authority tag joined by hyphens followed by
    either the end of the string or another hyphen; COMPACT needs the
    tag with no separators. None, empty and whitespace-only input is
    UNRECOGNIZED.
    """
    if not text:
        return IdentifierFormat.UNRECOGNIZED
    stripped = text.strip()
    if stripped.startswith(DELIMITED_PREFIX):
        rest = stripped[len(DELIMITED_PREFIX):]
        if not rest or rest.startswith(SEPARATOR):
            return IdentifierFormat.DELIMITED
        return IdentifierFormat.UNRECOGNIZED
    if stripped.startswith(COMPACT_PREFIX):
        return IdentifierFormat.COMPACT
    return IdentifierFormat.UNRECOGNIZED
