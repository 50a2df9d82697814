"""
Structured bridge error exception type.

Raised for contract violations of the library's own surface (for example
writing to an external process that already exited). Failures reported by a
wrapped service are never raised; they travel as result data.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class BridgeError(Exception):
    """Represents a structured error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        operation: Operation name where the error originated (e.g. ``"process.send"``).
        retryable: Hint for callers that may retry (not authoritative).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    operation: str
    retryable: bool = False
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.operation} {self.code.value}: {self.message}"


__all__ = ["BridgeError"]
