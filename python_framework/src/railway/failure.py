"""
Failure description — structured error information for the failure track.

ErrorCode values are grouped by the HTTP status they map to in
railway.http_support; FailureDescription is a frozen dataclass carrying
the code, a human-readable message, the optional causing exception and
a UTC timestamp.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class ErrorCode(Enum):
    """Structured error codes for the failure track."""

    # --- Client-side errors (4xx HTTP range) ---
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Malformed or incomplete input (→ 400)."""

    BUSINESS_RULE_ERROR = "BUSINESS_RULE_ERROR"
    """Domain rule violated, e.g. number already assigned (→ 409)."""

    # --- Server-side errors (5xx HTTP range) ---
    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Unexpected failure inside our own code (→ 500)."""

    DATABASE_ERROR = "DATABASE_ERROR"
    """Database connectivity or query failures (→ 500)."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor.

    >>> desc = FailureDescription(ErrorCode.VALIDATION_ERROR, "Page number is required")
    >>> desc.code
    <ErrorCode.VALIDATION_ERROR: 'VALIDATION_ERROR'>
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
