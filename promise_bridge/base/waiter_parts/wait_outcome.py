"""Terminal outcomes of a polling wait session."""

from __future__ import annotations

from enum import Enum


class WaitOutcome(str, Enum):
    """How a wait session left the ``Waiting`` state."""

    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    PROCESS_EXITED = "process_exited"
    CANCELLED = "cancelled"
    INTERRUPTED = "interrupted"


__all__ = ["WaitOutcome"]
