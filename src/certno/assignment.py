"""
Assignment — mint a certificate number for a verified application.

Domain layer: no I/O of its own. The uniqueness lookup is injected via
the DuplicateChecker port. Stages are connected on the railway:

  ensure complete
    → ensure its encoding decodes back to the same fields
      → encode(identifier)
        → ensure no other application holds it

Each stage short-circuits on failure, so the caller gets the first
reason the number cannot be assigned.
"""

from __future__ import annotations

import structlog
from railway import ErrorCode
from railway.result import Result

from certno.codec import encode, round_trips
from certno.domain.models import CertificateIdentifier
from certno.domain.ports import DuplicateChecker

log = structlog.get_logger()


def _ensure_unassigned(
    certificate_number: str,
    application_id: str | None,
    checker: DuplicateChecker,
) -> Result[str]:
    """Ask the checker and turn a hit into a BUSINESS_RULE_ERROR."""
    return checker.is_assigned(certificate_number, application_id).flat_map(
        lambda taken: (
            Result.failure(
                ErrorCode.BUSINESS_RULE_ERROR,
                f"Certificate number {certificate_number} is already assigned to another application",
            )
            if taken
            else Result.success(certificate_number)
        )
    )


def assign_certificate_number(
    identifier: CertificateIdentifier,
    application_id: str | None,
    checker: DuplicateChecker,
) -> Result[str]:
    """
    Encode `identifier` and check it is safe to store for `application_id`.

    Failures:
      - VALIDATION_ERROR: volume, serial or page number missing
      - BUSINESS_RULE_ERROR: the number would decode to different fields,
        or another application already holds it
      - whatever the checker reports (e.g. DATABASE_ERROR)
    """
    return (
        Result.success(identifier)
        .ensure(
            lambda ident: ident.is_complete,
            ErrorCode.VALIDATION_ERROR,
            "Volume, serial and page numbers are required",
        )
        .ensure(
            round_trips,
            ErrorCode.BUSINESS_RULE_ERROR,
            "Field lengths are ambiguous in the compact form; the number would not decode back",
        )
        .map(encode)
        .flat_map(lambda number: _ensure_unassigned(number, application_id, checker))
        .peek(lambda number: log.info("assignment.accepted", certificate_number=number))
        .peek_failure(lambda err: log.info("assignment.rejected", code=err.code.value, reason=err.message))
    )
