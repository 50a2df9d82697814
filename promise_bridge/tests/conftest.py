"""Pytest configuration for the promise_bridge test suite.

Provides a fake clock and a capture of structured events emitted on the
shared ``promise_bridge`` logger, and isolates tests from ``PB_*`` settings
of the surrounding environment.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from promise_bridge.base.logging import BASE_LOGGER_NAME, get_logger
from promise_bridge.tests.helpers import FakeClock

_PB_ENV = (
    "PB_POLL_INTERVAL_SECONDS",
    "PB_WAIT_TIMEOUT_SECONDS",
    "PB_HTTP_TIMEOUT_SECONDS",
    "PB_REQUIRE_DEADLINE",
    "PB_CONFIG_FILE",
    "PB_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _PB_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


class _EventCapture(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            return
        if isinstance(payload, dict) and "event" in payload:
            payload["level"] = record.levelname
            payload["has_exc"] = record.exc_info is not None
            self.events.append(payload)

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["event"] == event]


@pytest.fixture()
def bridge_events() -> Iterator[_EventCapture]:
    """Capture ``log_event`` payloads at DEBUG level for the duration of a test."""
    base = get_logger(BASE_LOGGER_NAME)
    previous = base.level
    handler = _EventCapture()
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    yield handler
    base.removeHandler(handler)
    base.setLevel(previous)
