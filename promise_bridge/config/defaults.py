"""Built-in adapter defaults.

Kept separate from the merge logic so values can be imported without
triggering environment or file lookups.
"""

from __future__ import annotations

FETCH_DEFAULT_METHOD = "GET"
FETCH_DEFAULT_USER_AGENT = "promise-bridge/0.1"

WATCH_DEFAULT_INTERVAL_SECONDS = 0.5

STAMP_DEFAULT_BITS = 16
STAMP_VERSION = 1

EVAL_DEFAULT_TIMEOUT_SECONDS = 30.0

__all__ = [
    "FETCH_DEFAULT_METHOD",
    "FETCH_DEFAULT_USER_AGENT",
    "WATCH_DEFAULT_INTERVAL_SECONDS",
    "STAMP_DEFAULT_BITS",
    "STAMP_VERSION",
    "EVAL_DEFAULT_TIMEOUT_SECONDS",
]
