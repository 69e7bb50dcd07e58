"""
Failure description — structured error information for the failure track.

An ErrorCode classifies the failure; FailureDescription adds the human
message, the optional causing exception and a timestamp.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    Input errors are raised by parsing and validation stages, the rest by
    infrastructure (files, serialization, configuration).
    """

    # --- Input errors ---
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """A document parsed but a field has the wrong shape or type."""

    PARSE_ERROR = "PARSE_ERROR"
    """Input text could not be parsed (no PEM block, malformed YAML)."""

    CERTIFICATE_DECODE_ERROR = "CERTIFICATE_DECODE_ERROR"
    """A PEM block was found but its payload is not a valid X.509 certificate."""

    NOT_FOUND = "NOT_FOUND"
    """A requested file or resource doesn't exist."""

    # --- Infrastructure errors ---
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"
    """An object could not be serialized to its output format."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """Required configuration is missing or inconsistent."""

    IO_ERROR = "IO_ERROR"
    """Reading or writing a file failed."""

    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Unexpected exception escaping a computation."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor carrying error code, message, optional exception, and timestamp.

    >>> desc = FailureDescription(ErrorCode.PARSE_ERROR, "unable to parse certificate")
    >>> desc.code
    <ErrorCode.PARSE_ERROR: 'PARSE_ERROR'>
    >>> desc.message
    'unable to parse certificate'
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @staticmethod
    def create(
        code: ErrorCode,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> FailureDescription:
        return FailureDescription(code=code, message=message, exception=exception)

    def with_message(self, message: str) -> FailureDescription:
        """Copy of this failure with a new message; code and cause are kept."""
        return FailureDescription(code=self.code, message=message, exception=self.exception)

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, if any."""
        if self.exception is None:
            return self.message
        tb = "".join(traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__))
        return f"{self.message}\n{tb}"

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
