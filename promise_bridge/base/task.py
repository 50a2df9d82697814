"""Governing promises for suspending operations.

``run_task`` and ``spawn`` create the promise that represents "my overall
operation" and hand it to the work function as its first argument. The work
passes it on explicitly (for example as ``poll_wait(..., governing=task)``),
so a supervisor holding the same promise can abandon the operation by
cancelling it. Cancellation is cooperative: it is observed at the next
iteration boundary of whatever the work is waiting on.

Outcome mapping
---------------
- return value -> promise resolved with it (ignored if already cancelled)
- ``CancelledError`` -> promise cancelled
- other ``Exception`` -> promise resolved with the exception object, logged
- ``KeyboardInterrupt`` -> promise cancelled with reason ``"interrupted"``,
  then the interrupt propagates
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from .cancellation import CancellationToken, CancelledError
from .logging import LogContext, get_logger, log_event
from .promise import Promise

_logger = get_logger("promise_bridge.task")

TaskFn = Callable[..., Any]


def _execute(promise: Promise, fn: TaskFn, args: tuple, kwargs: dict) -> None:
    ctx = LogContext(operation="task", label=promise.label)
    try:
        value = fn(promise, *args, **kwargs)
    except CancelledError as exc:
        promise.cancel(str(exc) or "cancelled")
    except KeyboardInterrupt:
        promise.cancel("interrupted")
        raise
    except Exception as exc:
        log_event(
            _logger,
            "task.error",
            ctx,
            level=logging.ERROR,
            promise_id=promise.id,
            error=str(exc),
            exc_info=True,
        )
        promise.resolve(exc)
    else:
        promise.resolve(value)
    log_event(_logger, "task.finish", ctx, level=logging.DEBUG, promise_id=promise.id, state=promise.state.value)


def run_task(
    fn: TaskFn,
    *args: Any,
    label: Optional[str] = None,
    token: Optional[CancellationToken] = None,
    **kwargs: Any,
) -> Promise:
    """Run ``fn(governing, *args, **kwargs)`` on the calling thread.

    Returns the governing promise, already settled.
    """
    promise: Promise = Promise(token=token, label=label)
    _execute(promise, fn, args, kwargs)
    return promise


def spawn(
    fn: TaskFn,
    *args: Any,
    label: Optional[str] = None,
    token: Optional[CancellationToken] = None,
    **kwargs: Any,
) -> Promise:
    """Run ``fn(governing, *args, **kwargs)`` on a daemon worker thread.

    Returns the governing promise immediately. ``KeyboardInterrupt`` is only
    delivered to the main thread, so interrupts reach spawned work solely
    through cancellation.
    """
    promise: Promise = Promise(token=token, label=label)
    worker = threading.Thread(
        target=_execute,
        args=(promise, fn, args, kwargs),
        name=f"task-{label or promise.id}",
        daemon=True,
    )
    worker.start()
    return promise


__all__ = ["run_task", "spawn"]
