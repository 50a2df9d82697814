"""Single-resolution future value.

A ``Promise`` is created pending, settles exactly once (resolved with a value
or cancelled) and then notifies its waiters in registration order. It owns the
``CancellationToken`` consulted by work running on its behalf, so cancelling
the promise and setting its flag are the same request.

Thread-safety: the state transition is guarded by a lock; waiter callbacks run
outside the lock on the settling thread.
"""
from __future__ import annotations

import itertools
import logging
import threading
import time
from typing import Any, Callable, Generic, List, Optional, TypeVar

from ..cancellation import CancellationToken, CancelledError
from ..logging import LogContext, get_logger, log_event
from .promise_state import PromiseState

T = TypeVar("T")

_IDS = itertools.count(1)
_PUMP_SLICE_SECONDS = 0.05

_logger = get_logger("promise_bridge.promise")


class Promise(Generic[T]):
    """Pending -> {Resolved, Cancelled}; the result is immutable once settled."""

    def __init__(self, *, token: CancellationToken | None = None, label: str | None = None) -> None:
        self.id = next(_IDS)
        self.label = label
        self._lock = threading.Lock()
        self._settled = threading.Event()
        self._state = PromiseState.PENDING
        self._result: Optional[T] = None
        self._waiters: List[Callable[["Promise[T]"], Any]] = []
        self.token = token if token is not None else CancellationToken()
        # a flag set elsewhere (e.g. cascading from a parent token) cancels the promise too
        self._listener = self._on_token_cancelled
        self.token.add_listener(self._listener)

    # state -------------------------------------------------------------------
    @property
    def state(self) -> PromiseState:
        return self._state

    @property
    def result(self) -> Optional[T]:
        """Settled value; ``None`` while pending or when cancelled."""
        return self._result

    @property
    def cancelled(self) -> bool:
        return self._state is PromiseState.CANCELLED

    def done(self) -> bool:
        return self._state is not PromiseState.PENDING

    # transitions -------------------------------------------------------------
    def resolve(self, value: T) -> bool:
        """Resolve with ``value``; returns ``False`` when already settled."""
        return self._settle(PromiseState.RESOLVED, value)

    def cancel(self, reason: str | None = None) -> bool:
        """Set the cancellation flag and settle as cancelled if still pending.

        Returns ``False`` when the promise had already settled.
        """
        was_pending = self._state is PromiseState.PENDING
        self.token.cancel(reason)
        self._settle(PromiseState.CANCELLED, None)
        return was_pending and self._state is PromiseState.CANCELLED

    def _on_token_cancelled(self, reason: str | None) -> None:
        self._settle(PromiseState.CANCELLED, None)

    def _settle(self, state: PromiseState, value: Optional[T]) -> bool:
        with self._lock:
            if self._state is not PromiseState.PENDING:
                return False
            self._state = state
            self._result = value
            waiters, self._waiters = self._waiters, []
        self._settled.set()
        if state is PromiseState.RESOLVED:
            # a shared token must not keep resolved promises alive
            self.token.remove_listener(self._listener)
        for waiter in waiters:
            self._notify(waiter)
        return True

    def _notify(self, waiter: Callable[["Promise[T]"], Any]) -> None:
        try:
            waiter(self)
        except Exception as exc:
            log_event(
                _logger,
                "promise.waiter_error",
                LogContext(operation="promise", label=self.label),
                level=logging.ERROR,
                promise_id=self.id,
                error=str(exc),
                exc_info=True,
            )

    # waiting -----------------------------------------------------------------
    def add_done_callback(self, fn: Callable[["Promise[T]"], Any]) -> None:
        """Register ``fn(promise)``; runs immediately if already settled."""
        with self._lock:
            if self._state is PromiseState.PENDING:
                self._waiters.append(fn)
                return
        self._notify(fn)

    def wait(self, timeout: float | None = None, *, dispatcher=None) -> bool:
        """Suspend until settled or ``timeout`` elapses; returns ``done()``.

        With a ``dispatcher`` the wait is a cooperative suspension point: queued
        callbacks (which may resolve this very promise) run while waiting.
        """
        if dispatcher is None:
            return self._settled.wait(timeout)
        deadline = None if timeout is None else time.monotonic() + timeout
        while not self._settled.is_set():
            if deadline is None:
                slice_ = _PUMP_SLICE_SECONDS
            else:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                slice_ = min(_PUMP_SLICE_SECONDS, remaining)
            dispatcher.run_pending(slice_)
        return self._settled.is_set()

    def value(self, timeout: float | None = None, *, dispatcher=None) -> T:
        """Wait and return the resolved value.

        Raises:
            CancelledError: the promise was cancelled.
            TimeoutError: still pending after ``timeout``.
        """
        if not self.wait(timeout, dispatcher=dispatcher):
            raise TimeoutError(f"promise {self.label or self.id} still pending after {timeout}s")
        if self._state is PromiseState.CANCELLED:
            raise CancelledError(self.token.reason or "promise cancelled")
        return self._result  # type: ignore[return-value]

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"Promise(id={self.id}, label={self.label!r}, state={self._state.value})"


__all__ = ["Promise"]
