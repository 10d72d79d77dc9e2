"""
PostgreSQL adapter — certificate number uniqueness lookup.

Adapter layer — implements the DuplicateChecker port using psycopg (v3)
with parameterized queries against the registration schema:

  applications.certificate_number  (only rows with verified = true count)
  certificates.certificate_number  (issued certificates, keyed by application_id)

A number is taken when either table holds it for a different application.
Transient connection failures are retried with tenacity; anything else
becomes Result.failure(DATABASE_ERROR, ...) at this boundary.
"""

from __future__ import annotations

from typing import Any

import psycopg
import structlog
from railway import ErrorCode
from railway.result import Result
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

log = structlog.get_logger()

_APPLICATION_HOLDERS = """
SELECT id FROM applications
WHERE certificate_number = %s AND verified = true
"""

_CERTIFICATE_HOLDERS = """
SELECT id FROM certificates
WHERE certificate_number = %s
"""


class PsycopgDuplicateChecker:
    """
    Check certificate number uniqueness in PostgreSQL.

    Implements the DuplicateChecker port.
    """

    def __init__(self, dsn: str) -> None:
        self._dsn = dsn

    def is_assigned(self, certificate_number: str, application_id: str | None) -> Result[bool]:
        """
        Return Result[bool]: True when another application holds the number.

        Returns Result.failure(DATABASE_ERROR, ...) when the lookup fails.
        """
        return Result.from_computation(
            lambda: self._lookup(certificate_number, application_id),
            ErrorCode.DATABASE_ERROR,
            "Failed to check certificate number uniqueness",
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=0.1, max=5),
        retry=retry_if_exception_type(psycopg.OperationalError),
        reraise=True,
    )
    def _lookup(self, certificate_number: str, application_id: str | None) -> bool:
        """Both queries on one connection; exceptions caught by from_computation."""
        with psycopg.connect(self._dsn) as conn, conn.cursor() as cur:
            if self._held_by_other(cur, _APPLICATION_HOLDERS, "id", certificate_number, application_id):
                log.info("repository.duplicate", table="applications", certificate_number=certificate_number)
                return True
            if self._held_by_other(
                cur, _CERTIFICATE_HOLDERS, "application_id", certificate_number, application_id
            ):
                log.info("repository.duplicate", table="certificates", certificate_number=certificate_number)
                return True
            return False

    def _held_by_other(
        self,
        cur: psycopg.Cursor[Any],
        query: str,
        owner_column: str,
        certificate_number: str,
        application_id: str | None,
    ) -> bool:
        """Run one holder query, excluding rows owned by `application_id`."""
        params: list[Any] = [certificate_number]
        if application_id is not None:
            query = query.rstrip() + f" AND {owner_column} IS DISTINCT FROM %s"
            params.append(application_id)
        cur.execute(query, params)
        return cur.fetchone() is not None
