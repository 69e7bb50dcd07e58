"""
Railway-Oriented Programming (ROP) primitives.

Explicit, composable error handling — no exceptions in pipeline logic.

    from railway import Result, ErrorCode

    def require_bundle(text: str) -> Result[str]:
        if not text:
            return Result.failure(ErrorCode.PARSE_ERROR, "bundle is empty")
        return Result.success(text)

    result = require_bundle(raw).map(str.strip)
"""

from railway.result import Result, Success, Failure
from railway.failure import ErrorCode, FailureDescription
from railway.execution import (
    ExecutionContext,
    NoOpExecutionContext,
    LoggingExecutionContext,
)
from railway.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ExecutionContext",
    "NoOpExecutionContext",
    "LoggingExecutionContext",
    "ResultAssertions",
]

__version__ = "1.1.0"
