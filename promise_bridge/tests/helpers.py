"""Shared fakes for the waiter, task and bridge tests.

``ScriptedProcess`` implements the ``ExternalProcess`` protocol without a real
child process. With a ``FakeClock`` each bounded wait advances the clock by
its full bound, so deadline arithmetic is deterministic; without one it sleeps
for real.
"""
from __future__ import annotations

import time
from typing import Callable, Dict, List, Optional


class FakeClock:
    """Monotonic clock under test control."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedProcess:
    """Fake external process with scripted liveness and output.

    Attributes:
        live_for: number of ``is_live`` checks answered ``True`` (``None`` = forever).
        outputs: wait call number (1-based) -> output returned by that call.
        interrupt_on: wait call number that raises ``KeyboardInterrupt``.
        on_wait: hook called with the wait call number before it "blocks".
    """

    def __init__(
        self,
        clock: Optional[FakeClock] = None,
        *,
        live_for: Optional[int] = None,
        outputs: Optional[Dict[int, str]] = None,
        interrupt_on: Optional[int] = None,
        on_wait: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.clock = clock
        self.live_for = live_for
        self.outputs = outputs or {}
        self.interrupt_on = interrupt_on
        self.on_wait = on_wait
        self.wait_calls: List[float] = []
        self.exclusive_flags: List[bool] = []
        self.live_checks = 0

    def is_live(self) -> bool:
        self.live_checks += 1
        return self.live_for is None or self.live_checks <= self.live_for

    def wait_for_output(self, bound: float, exclusive: bool = False) -> Optional[str]:
        self.wait_calls.append(bound)
        self.exclusive_flags.append(exclusive)
        call = len(self.wait_calls)
        if self.on_wait is not None:
            self.on_wait(call)
        if self.interrupt_on == call:
            raise KeyboardInterrupt
        if self.clock is not None:
            self.clock.advance(bound)
        else:
            time.sleep(bound)
        return self.outputs.get(call)


__all__ = ["FakeClock", "ScriptedProcess"]
