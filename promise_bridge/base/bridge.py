"""Resolution bridge: one-shot callback APIs to promises.

Purpose
-------
Wrap any external call that accepts exactly one completion callback and does
its work out-of-band. ``bridge`` returns a pending ``Promise`` immediately and
resolves it once, when the callback fires, with a value built from the
callback arguments plus an ambient snapshot taken at that instant.

Contract
--------
- At most one resolution. Services that call back again (e.g. after an
  internal retry) are ignored; the duplicate is logged at debug level.
- No timeout is imposed. A callback that never fires leaves the promise
  pending; bound the wait on the caller side (``Promise.wait(timeout)``).
- Failures reported through the callback are ordinary data. Only exceptions
  raised synchronously by ``invoke`` propagate.
- An exception from ``ambient`` or ``build`` is logged and becomes the
  resolved value, so the promise never stays pending because of it.
- With a ``dispatcher`` the resolution is queued and happens on the thread
  that pumps the dispatcher; the ambient snapshot is still taken when the
  callback fires.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .cancellation import CancellationToken
from .dispatch import Dispatcher
from .logging import LogContext, get_logger, log_event
from .promise import Promise

OnComplete = Callable[..., None]

_logger = get_logger("promise_bridge.bridge")


@dataclass(frozen=True)
class Completion:
    """Arguments a service passed to its callback, plus the ambient snapshot."""

    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)
    ambient: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Look ``key`` up in the callback keywords, then the ambient snapshot."""
        if key in self.kwargs:
            return self.kwargs[key]
        return self.ambient.get(key, default)

    def __getitem__(self, key: str) -> Any:
        if key in self.kwargs:
            return self.kwargs[key]
        return self.ambient[key]

    def __contains__(self, key: object) -> bool:
        return key in self.kwargs or key in self.ambient


def bridge(
    invoke: Callable[[OnComplete], Any],
    *,
    build: Optional[Callable[[Completion], Any]] = None,
    ambient: Optional[Callable[[], Mapping[str, Any]]] = None,
    dispatcher: Optional[Dispatcher] = None,
    token: Optional[CancellationToken] = None,
    label: Optional[str] = None,
) -> Promise:
    """Call ``invoke(on_complete)`` and return the promise it will resolve.

    Args:
        invoke: Starts the external operation; receives the completion callback.
        build: Turns the ``Completion`` into the promise value. Defaults to the
            ``Completion`` itself.
        ambient: Read when the callback fires; its mapping is captured into
            ``Completion.ambient``. Whatever it closes over must stay valid
            until then.
        dispatcher: Queue resolution onto this cooperative scheduler.
        token: Cancellation flag for the promise; lets the service observe
            abandonment when it was created by the caller beforehand.
        label: Name used in logs.
    """
    promise: Promise = Promise(token=token, label=label)
    ctx = LogContext(operation="bridge", label=label)

    def _log_duplicate() -> None:
        log_event(
            _logger,
            "bridge.duplicate",
            ctx,
            level=logging.DEBUG,
            promise_id=promise.id,
            state=promise.state.value,
        )

    def _resolve(value: Any) -> None:
        if promise.resolve(value):
            log_event(_logger, "bridge.resolve", ctx, level=logging.DEBUG, promise_id=promise.id)
        else:
            _log_duplicate()

    def on_complete(*args: Any, **kwargs: Any) -> None:
        if promise.done():
            _log_duplicate()
            return
        try:
            snapshot = dict(ambient()) if ambient is not None else {}
            completion = Completion(args=tuple(args), kwargs=dict(kwargs), ambient=snapshot)
            value = build(completion) if build is not None else completion
        except Exception as exc:
            log_event(
                _logger,
                "bridge.build_error",
                ctx,
                level=logging.ERROR,
                promise_id=promise.id,
                error=str(exc),
                exc_info=True,
            )
            value = exc
        if dispatcher is not None:
            dispatcher.call_soon(_resolve, value)
        else:
            _resolve(value)

    invoke(on_complete)
    return promise


__all__ = ["Completion", "OnComplete", "bridge"]
