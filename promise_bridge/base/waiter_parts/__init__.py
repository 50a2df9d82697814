"""Waiter parts package."""

from .wait_outcome import WaitOutcome
from .wait_report import WaitReport
from .wait_session import DEADLINE_SLACK_SECONDS, WaitSession, poll_wait

__all__ = ["DEADLINE_SLACK_SECONDS", "WaitOutcome", "WaitReport", "WaitSession", "poll_wait"]
