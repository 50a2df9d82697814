"""One-shot filesystem change notification adapter.

A daemon thread polls ``os.stat`` on the path and calls back on the first
change: ``created``, ``modified`` (mtime or size differs) or ``deleted``.
Cancelling the returned promise stops the watcher at its next poll.
"""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional, Tuple

from ..base.bridge import Completion, OnComplete, bridge
from ..base.cancellation import CancellationToken
from ..base.dispatch import Dispatcher
from ..base.dto import WatchEvent
from ..base.errors import classify_exception
from ..base.promise import Promise
from ..config import get_adapter_config
from ._service import run_service

_Signature = Optional[Tuple[int, int]]


def _signature(path: str) -> _Signature:
    try:
        st = os.stat(path)
    except FileNotFoundError:
        return None
    return st.st_mtime_ns, st.st_size


def _build(completion: Completion) -> WatchEvent:
    return WatchEvent(**{**completion.ambient, **completion.kwargs})


def _watch(
    path: str, baseline: _Signature, interval: float, token: CancellationToken
) -> Optional[Mapping[str, Any]]:
    # wakes early when the promise is cancelled
    while not token.wait(interval):
        current = _signature(path)
        if current == baseline:
            continue
        if baseline is None:
            change = "created"
        elif current is None:
            change = "deleted"
        else:
            change = "modified"
        return {
            "success": True,
            "change": change,
            "mtime": current[0] / 1e9 if current is not None else None,
        }
    return None


def watch_file(
    path: str,
    *,
    interval: Optional[float] = None,
    dispatcher: Optional[Dispatcher] = None,
) -> Promise:
    """Resolve with a :class:`WatchEvent` on the first change to ``path``."""
    cfg = get_adapter_config("watch", {"interval": interval})
    poll_every = float(cfg["interval"])
    if poll_every <= 0:
        raise ValueError(f"watch interval must be positive, got {poll_every}")
    token = CancellationToken()
    target = os.fspath(path)
    # taken before the thread starts so changes made right after this call count
    baseline = _signature(target)

    def work() -> Optional[Mapping[str, Any]]:
        try:
            return _watch(target, baseline, poll_every, token)
        except OSError as exc:
            return {"success": False, "error": str(exc), "error_code": classify_exception(exc).value}

    def invoke(on_complete: OnComplete) -> None:
        run_service(work, on_complete, name=f"watch {target}")

    return bridge(
        invoke,
        build=_build,
        ambient=lambda: {"path": target},
        dispatcher=dispatcher,
        token=token,
        label=f"watch {target}",
    )


__all__ = ["watch_file"]
