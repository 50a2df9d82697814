"""Core primitives: promise, bridge, cancellation, dispatcher, waiter, tasks."""

from .bridge import Completion, bridge
from .cancellation import CancellationToken, CancelledError
from .dispatch import Dispatcher
from .errors import BridgeError, ErrorCode, classify_exception
from .process import ExternalProcess, PopenProcess
from .promise import Promise, PromiseState
from .task import run_task, spawn
from .timeouts import TimeoutConfig, get_timeout_config
from .waiter import WaitOutcome, WaitReport, WaitSession, poll_wait

__all__ = [
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
    "TimeoutConfig",
    "WaitOutcome",
    "WaitReport",
    "WaitSession",
    "bridge",
    "classify_exception",
    "get_timeout_config",
    "poll_wait",
    "run_task",
    "spawn",
]
