"""Cooperative cancellation flag implementation.

Exposes ``CancellationToken``: the one-way ``False -> True`` flag owned by a
governing promise. Waiters read it between bounded waits; only code outside
the waiting operation sets it. Worker threads may also sleep on it with
``wait`` so a cancel wakes them immediately.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List, Optional

from ..logging import LogContext, get_logger, log_event
from .state import State
from .cancelled_error import CancelledError

_logger = get_logger("promise_bridge.cancellation")

Listener = Callable[[Optional[str]], None]


class CancellationToken:
    """A cooperative cancellation flag with cascading children.

    Thread-safe and never reset. Children linked before or after the parent
    was cancelled end up cancelled with the parent's reason. Listeners run
    once, on the cancelling thread, before the cascade.
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List["CancellationToken"] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._state.flag.is_set()

    @property
    def reason(self) -> Optional[str]:
        """Reason given by the cancelling call, if any."""
        return self._state.reason

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block up to ``timeout`` seconds for cancellation; returns ``cancelled``."""
        return self._state.flag.wait(timeout)

    def cancel(self, reason: Optional[str] = None) -> bool:
        """Request cancellation.

        Returns ``True`` only for the call that performed the transition; later
        calls keep the first reason.
        """
        with self._lock:
            if self.cancelled:
                return False
            self._state.reason = reason
            self._state.flag.set()
            listeners, self._state.listeners = self._state.listeners, []
            children = tuple(self._children)
        for listener in listeners:
            self._notify(listener, reason)
        for child in children:
            child.cancel(reason)
        return True

    def _notify(self, listener: Listener, reason: Optional[str]) -> None:
        try:
            listener(reason)
        except Exception as exc:
            log_event(
                _logger,
                "cancellation.listener_error",
                LogContext(operation="cancel"),
                level=logging.ERROR,
                reason=reason,
                error=str(exc),
                exc_info=True,
            )

    def add_listener(self, listener: Listener) -> None:
        """Call ``listener(reason)`` once on cancellation (now, if already cancelled)."""
        with self._lock:
            if not self.cancelled:
                self._state.listeners.append(listener)
                return
        listener(self._state.reason)

    def remove_listener(self, listener: Listener) -> bool:
        """Forget a pending listener; ``False`` when it was not registered."""
        with self._lock:
            try:
                self._state.listeners.remove(listener)
            except ValueError:
                return False
        return True

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Cascade this token's cancellation to ``token``; returns ``token``."""
        with self._lock:
            self._children.append(token)
            inherited = self.cancelled
        if inherited:
            token.cancel(self._state.reason)
        return token

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` once cancellation was requested."""
        if self.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        state = f"cancelled, reason={self.reason!r}" if self.cancelled else "active"
        return f"CancellationToken({state}, children={len(self._children)})"


__all__ = ["CancellationToken"]
