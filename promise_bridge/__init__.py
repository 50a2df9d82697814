"""promise_bridge package

Bridges single-shot callback APIs into promises and provides a cancellable,
time-budgeted polling waiter for output of live external processes.

Public API (re-exported):
    - Version: ``__version__``
    - Promise: :class:`Promise`, :class:`PromiseState`
    - Bridge: :func:`bridge`, :class:`Completion`
    - Cancellation: :class:`CancellationToken`, :class:`CancelledError`
    - Waiter: :func:`poll_wait`, :class:`WaitSession`, :class:`WaitOutcome`
    - Tasks: :func:`run_task`, :func:`spawn`
    - Scheduling: :class:`Dispatcher`
    - Errors: :class:`BridgeError`, :class:`ErrorCode`

Adapters for concrete services live in ``promise_bridge.adapters``.
"""

from .base import (
    BridgeError,
    CancellationToken,
    CancelledError,
    Completion,
    Dispatcher,
    ErrorCode,
    ExternalProcess,
    PopenProcess,
    Promise,
    PromiseState,
    WaitOutcome,
    WaitReport,
    WaitSession,
    bridge,
    poll_wait,
    run_task,
    spawn,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BridgeError",
    "CancellationToken",
    "CancelledError",
    "Completion",
    "Dispatcher",
    "ErrorCode",
    "ExternalProcess",
    "PopenProcess",
    "Promise",
    "PromiseState",
    "WaitOutcome",
    "WaitReport",
    "WaitSession",
    "bridge",
    "poll_wait",
    "run_task",
    "spawn",
]
