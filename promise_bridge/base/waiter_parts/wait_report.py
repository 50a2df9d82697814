"""Snapshot of a finished wait session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .wait_outcome import WaitOutcome


@dataclass(frozen=True)
class WaitReport:
    """Outcome, captured output and bookkeeping of one wait session.

    Fields:
      outcome: terminal state of the session
      data: output captured on ``COMPLETED``; ``None`` otherwise
      elapsed: seconds measured on the session clock
      attempts: number of bounded-wait calls issued
    """

    outcome: WaitOutcome
    data: Optional[str]
    elapsed: float
    attempts: int

    @property
    def completed(self) -> bool:
        return self.outcome is WaitOutcome.COMPLETED


__all__ = ["WaitReport"]
