"""Structural contract for an external process the waiter can poll."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class ExternalProcess(Protocol):  # pragma: no cover - structural protocol
    """Liveness check plus a bounded wait for output.

    ``wait_for_output`` blocks for at most ``bound`` seconds and returns early
    with the output that arrived, or ``None`` when nothing did. With
    ``exclusive`` the wait accepts only this process's output and services no
    other scheduled work.
    """

    def is_live(self) -> bool: ...

    def wait_for_output(self, bound: float, exclusive: bool = False) -> Optional[str]: ...


__all__ = ["ExternalProcess"]
