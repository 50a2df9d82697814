"""Polling waiter public surface.

``poll_wait`` blocks on incremental output of a live external process while
checking a governing cancellation flag between bounded waits. ``WaitSession``
exposes the full outcome for callers that need more than the output.
"""

from .waiter_parts.wait_outcome import WaitOutcome
from .waiter_parts.wait_report import WaitReport
from .waiter_parts.wait_session import (
    DEADLINE_SLACK_SECONDS,
    Governing,
    WaitSession,
    poll_wait,
)

__all__ = ["DEADLINE_SLACK_SECONDS", "Governing", "WaitOutcome", "WaitReport", "WaitSession", "poll_wait"]
