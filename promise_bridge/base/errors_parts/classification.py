"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Adapters use ``classify_exception`` to turn a transport or process failure
into the ``error_code`` field of a failure result. Precedence follows HTTP
status extraction first, then exception type, then message heuristics.
"""
from __future__ import annotations

import subprocess  # nosec B404 - only exception types are referenced
from typing import Dict, Optional

import httpx

from .error_code import ErrorCode
from .bridge_error import BridgeError


def _valid_status(value: object) -> Optional[int]:
    return value if isinstance(value, int) and 100 <= value < 600 else None


def _extract_status(exc: BaseException) -> Optional[int]:
    """Return the HTTP status carried by ``exc``, if any.

    Looks at ``exc.status_code``, ``exc.status`` and finally
    ``exc.response.status_code`` (the ``httpx.HTTPStatusError`` shape).
    """
    candidates = (
        getattr(exc, "status_code", None),
        getattr(exc, "status", None),
        getattr(getattr(exc, "response", None), "status_code", None),
    )
    for candidate in candidates:
        status = _valid_status(candidate)
        if status is not None:
            return status
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

_MESSAGE_PATTERNS = (
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("unauthorized", "forbidden", "permission denied")),
    (ErrorCode.NOT_FOUND, ("not found", "no such file", "does not exist")),
    (ErrorCode.UNAVAILABLE, ("unavailable", "connection refused")),
    (ErrorCode.VALIDATION, ("invalid", "malformed")),
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    """Substring heuristic mapping for exceptions without structure."""
    for code, patterns in _MESSAGE_PATTERNS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_status(status: int) -> ErrorCode:
    """Map an HTTP status code to an :class:`ErrorCode` (``UNKNOWN`` if unmapped)."""
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ``BridgeError`` passthrough.
        2. Timeouts (builtin, ``httpx`` and ``subprocess``).
        3. HTTP status mapping.
        4. Connection and missing-file errors.
        5. Message heuristics.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, BridgeError):
        return exc.code
    if isinstance(exc, (TimeoutError, httpx.TimeoutException, subprocess.TimeoutExpired)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if isinstance(exc, (httpx.TransportError, ConnectionError)):
        return ErrorCode.UNAVAILABLE
    if isinstance(exc, FileNotFoundError):
        return ErrorCode.NOT_FOUND
    if isinstance(exc, subprocess.CalledProcessError):
        return ErrorCode.PROCESS_FAILED
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


__all__ = ["classify_exception", "classify_status"]
