"""
Ports — Protocol-based interfaces for infrastructure adapters.

The codec itself is pure. Assigning a number to an application also
needs to know whether that exact number is already taken, which is a
question for the registration database:

  Domain ← Ports (protocols) ← Adapters (implementations)

Adapters satisfy the protocol structurally; no inheritance needed.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from railway.result import Result


@runtime_checkable
class DuplicateChecker(Protocol):
    """
    Port: is a certificate number already assigned to another application?

    `certificate_number` is the compact form produced by `encode`, matched
    exactly. Rows belonging to `application_id` itself are ignored, so
    re-verifying an application with its own number is not a duplicate.
    Rows with no owning application always count as holders.

    Returns Result[bool]; True means taken.
    """

    def is_assigned(self, certificate_number: str, application_id: str | None) -> Result[bool]: ...
