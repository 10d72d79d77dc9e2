"""
HTTP integration — ErrorCode → HTTP status mapping and error bodies.

Framework-agnostic: build_response() returns a (body, status) tuple that
any web framework can wrap, e.g. FastAPI's JSONResponse.

    body, status = build_response(result)
    return JSONResponse(status_code=status, content=body)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, TypeVar

from railway.failure import ErrorCode, FailureDescription
from railway.result import Result

T = TypeVar("T")


class HttpStatusMapper:
    """Maps ErrorCode enum values to HTTP status codes."""

    _CODE_TO_STATUS: dict[ErrorCode, int] = {
        ErrorCode.VALIDATION_ERROR: 400,
        ErrorCode.BUSINESS_RULE_ERROR: 409,
        ErrorCode.TECHNICAL_ERROR: 500,
        ErrorCode.DATABASE_ERROR: 500,
    }

    @classmethod
    def map_error_code(cls, code: ErrorCode) -> int:
        return cls._CODE_TO_STATUS.get(code, 500)


@dataclass(frozen=True, slots=True)
class ErrorResponse:
    """
    Standardized error response body.

        {
            "error_code": "BUSINESS_RULE_ERROR",
            "message": "Certificate number ... is already assigned ...",
            "timestamp": "2026-10-17T10:30:00+00:00"
        }
    """

    error_code: str
    message: str
    timestamp: str

    @staticmethod
    def from_failure(failure: FailureDescription) -> ErrorResponse:
        return ErrorResponse(
            error_code=failure.code.value,
            message=failure.message,
            timestamp=failure.timestamp.isoformat(),
        )

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def build_response(result: Result[T], success_status: int = 200) -> tuple[Any, int]:
    """(body, status) from a Result: the value on success, an ErrorResponse dict on failure."""
    return result.either(
        on_success=lambda value: (value, success_status),
        on_failure=lambda error: (
            ErrorResponse.from_failure(error).to_dict(),
            HttpStatusMapper.map_error_code(error.code),
        ),
    )
