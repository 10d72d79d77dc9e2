"""
Railway-Oriented Programming (ROP) — explicit, composable error handling.

    from railway import Result, ErrorCode

    def require_page(page: str) -> Result[str]:
        if not page:
            return Result.failure(ErrorCode.VALIDATION_ERROR, "Page number is required")
        return Result.success(page)

    result = Result.success("21").flat_map(require_page).map(int)
"""

from railway.result import Result, Success, Failure
from railway.failure import ErrorCode, FailureDescription
from railway.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ResultAssertions",
]

__version__ = "1.0.0"
