"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation flag used by promises and the polling waiter via the
canonical ``promise_bridge.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is the one-way flag owned by a governing ``Promise``.
  It is checked between bounded waits, never preemptively.
- ``CancelledError`` is raised when a caller asks for the value of a
  cancelled promise.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
