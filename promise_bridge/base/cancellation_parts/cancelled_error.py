"""Cancellation error type.

Defines the public ``CancelledError`` raised when a caller asks for the value
of a cancelled promise or when a task observes its own cancellation flag.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Cancellation is an intentional early exit, not a failure. The dedicated
    type lets ``run_task`` map it to the ``CANCELLED`` promise state instead of
    carrying it as an error value.
    """


__all__ = ["CancelledError"]
