"""Worker-thread harness shared by the adapters.

``run_service`` plays the part of a one-shot callback service: it runs
blocking ``work`` on a daemon thread and calls ``on_complete(**fields)`` once
with the mapping the work returned. Work that returns ``None`` was abandoned
(its promise was cancelled) and produces no callback. Unexpected exceptions
are reported through the callback as failure fields rather than raised on a
thread nobody joins.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping, Optional

from ..base.bridge import OnComplete
from ..base.errors import classify_exception
from ..base.logging import LogContext, get_logger, log_event

_logger = get_logger("promise_bridge.adapters")

Work = Callable[[], Optional[Mapping[str, Any]]]


def run_service(work: Work, on_complete: OnComplete, *, name: str) -> threading.Thread:
    """Start ``work`` on a daemon thread and report its fields to ``on_complete``."""

    def _target() -> None:
        try:
            fields = work()
        except Exception as exc:
            log_event(
                _logger,
                "service.error",
                LogContext(operation="service", label=name),
                level=logging.ERROR,
                error=str(exc),
                exc_info=True,
            )
            fields = {
                "success": False,
                "error": str(exc),
                "error_code": classify_exception(exc).value,
            }
        if fields is None:
            return
        on_complete(**fields)

    thread = threading.Thread(target=_target, name=f"service-{name}", daemon=True)
    thread.start()
    return thread


__all__ = ["run_service"]
