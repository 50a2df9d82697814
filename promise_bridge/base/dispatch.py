"""Cooperative callback dispatcher.

Purpose
-------
Model the single-threaded cooperative scheduler: external services may finish
on any thread, but the completions they hand to a ``Dispatcher`` only run when
the owning thread reaches a suspension point and pumps the queue with
``run_pending``. Suspension points in this package are
``Promise.wait(dispatcher=...)`` and the non-exclusive bounded waits of
``PopenProcess``.

Ordering
--------
Callbacks run in the order they were queued. A callback queued while the
queue is being drained runs on the next pump, so one pump is bounded.
"""
from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Any, Callable, Deque, Tuple

from .logging import LogContext, get_logger, log_event

_Entry = Tuple[Callable[..., Any], Tuple[Any, ...]]

_logger = get_logger("promise_bridge.dispatch")


class Dispatcher:
    """Thread-safe FIFO of callbacks executed by the pumping thread."""

    def __init__(self, name: str = "dispatcher") -> None:
        self.name = name
        self._queue: Deque[_Entry] = deque()
        self._cond = threading.Condition()

    def call_soon(self, fn: Callable[..., Any], *args: Any) -> None:
        """Queue ``fn(*args)``; safe to call from any thread."""
        with self._cond:
            self._queue.append((fn, args))
            self._cond.notify_all()

    def pending(self) -> int:
        with self._cond:
            return len(self._queue)

    def run_pending(self, timeout: float = 0.0) -> int:
        """Run the callbacks queued so far and return how many ran.

        When the queue is empty, block up to ``timeout`` seconds for the first
        callback to arrive.
        """
        deadline = time.monotonic() + max(0.0, timeout)
        with self._cond:
            while not self._queue:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return 0
                self._cond.wait(remaining)
            batch = list(self._queue)
            self._queue.clear()
        for fn, args in batch:
            try:
                fn(*args)
            except Exception as exc:
                log_event(
                    _logger,
                    "dispatch.callback_error",
                    LogContext(operation=self.name),
                    level=logging.ERROR,
                    callback=getattr(fn, "__qualname__", repr(fn)),
                    error=str(exc),
                    exc_info=True,
                )
        return len(batch)


__all__ = ["Dispatcher"]
