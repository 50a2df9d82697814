"""Cancellable, time-budgeted polling wait on a live external process.

A ``WaitSession`` repeatedly issues bounded waits against an external process
until output arrives, the process exits, the overall deadline elapses or the
governing cancellation flag is set. Each iteration checks, in order:

1. the governing flag (``CANCELLED``),
2. process liveness (``PROCESS_EXITED``),
3. the overall deadline (``TIMED_OUT``),

then waits for ``min(poll_interval, timeout - elapsed)`` seconds (or
``poll_interval`` when unbounded) and re-measures ``elapsed`` from the clock,
since the wait may return early.

Interrupts
----------
The loop runs inside an ``except KeyboardInterrupt`` scope so the session can
record the ``INTERRUPTED`` outcome and log it. The same interrupt is raised
again once that scope is left; a user abort never turns into a quiet return.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Union

from ..cancellation import CancellationToken
from ..logging import LogContext, get_logger, log_event
from ..process import ExternalProcess
from ..promise import Promise
from ..timeouts import get_timeout_config
from .wait_outcome import WaitOutcome
from .wait_report import WaitReport

# remaining budgets below this count as elapsed (clock and float resolution)
DEADLINE_SLACK_SECONDS = 1e-3

Governing = Union[Promise, CancellationToken]

_logger = get_logger("promise_bridge.waiter")


def _token_of(governing: Governing) -> CancellationToken:
    if isinstance(governing, Promise):
        return governing.token
    return governing


class WaitSession:
    """State of one polling wait: deadline, interval, elapsed time and result."""

    def __init__(
        self,
        process: ExternalProcess,
        *,
        governing: Governing,
        timeout: Optional[float] = None,
        exclusive: bool = False,
        poll_interval: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        label: Optional[str] = None,
    ) -> None:
        cfg = get_timeout_config()
        if poll_interval is None:
            poll_interval = cfg.poll_interval_seconds
        if timeout is None:
            timeout = cfg.overall_timeout_seconds
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")
        if timeout is not None and timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {timeout}")
        if timeout is None and cfg.require_deadline:
            raise ValueError("an overall timeout is required (PB_REQUIRE_DEADLINE is set)")

        self.timeout = timeout
        self.poll_interval = poll_interval
        self.exclusive = exclusive
        self.elapsed = 0.0
        self.attempts = 0
        self.result: Optional[str] = None
        self.outcome: Optional[WaitOutcome] = None
        self.report: Optional[WaitReport] = None
        self._process = process
        self._token = _token_of(governing)
        self._clock = clock
        self._ctx = LogContext(operation="wait", label=label, pid=getattr(process, "pid", None))

    def run(self) -> WaitReport:
        """Drive the session to a terminal outcome.

        Raises:
            KeyboardInterrupt: re-raised after bookkeeping when the user
                interrupted a bounded wait.
            RuntimeError: the session already ran.
        """
        if self.outcome is not None:
            raise RuntimeError("wait session already ran")
        started = self._clock()
        interrupt: Optional[KeyboardInterrupt] = None
        try:
            self.outcome = self._loop(started)
        except KeyboardInterrupt as exc:
            interrupt = exc
            self.outcome = WaitOutcome.INTERRUPTED
            self.result = None
        self._advance(started)
        self.report = WaitReport(
            outcome=self.outcome,
            data=self.result,
            elapsed=self.elapsed,
            attempts=self.attempts,
        )
        log_event(
            _logger,
            "wait.finish",
            self._ctx,
            level=logging.WARNING if interrupt is not None else logging.DEBUG,
            outcome=self.outcome.value,
            attempts=self.attempts,
            elapsed=round(self.elapsed, 4),
            timeout=self.timeout,
            poll_interval=self.poll_interval,
            cancel_reason=self._token.reason if self.outcome is WaitOutcome.CANCELLED else None,
        )
        if interrupt is not None:
            raise interrupt
        return self.report

    def _advance(self, started: float) -> None:
        self.elapsed = max(self.elapsed, self._clock() - started)

    def _loop(self, started: float) -> WaitOutcome:
        while True:
            if self._token.cancelled:
                return WaitOutcome.CANCELLED
            if not self._process.is_live():
                return WaitOutcome.PROCESS_EXITED
            bound = self.poll_interval
            if self.timeout is not None:
                remaining = self.timeout - self.elapsed
                if remaining <= DEADLINE_SLACK_SECONDS:
                    return WaitOutcome.TIMED_OUT
                bound = min(bound, remaining)
            self.attempts += 1
            output = self._process.wait_for_output(bound, self.exclusive)
            self._advance(started)
            if output:
                self.result = output
                return WaitOutcome.COMPLETED


def poll_wait(
    process: ExternalProcess,
    timeout: Optional[float] = None,
    exclusive: bool = False,
    poll_interval: Optional[float] = None,
    *,
    governing: Governing,
) -> Optional[str]:
    """Wait for output from ``process``; return it, or ``None`` without data.

    ``None`` covers process exit, timeout and cancellation of ``governing``.
    A ``KeyboardInterrupt`` raised during a bounded wait propagates to the
    caller once the session has been closed out.
    """
    session = WaitSession(
        process,
        governing=governing,
        timeout=timeout,
        exclusive=exclusive,
        poll_interval=poll_interval,
    )
    return session.run().data


__all__ = ["DEADLINE_SLACK_SECONDS", "Governing", "WaitSession", "poll_wait"]
