"""Internal state holder for cancellation tokens.

``flag`` is the one-way transition (an ``Event`` so workers can sleep on it);
``reason`` is recorded before the flag is set, and ``listeners`` wait for the
transition.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Event
from typing import Callable, List, Optional


@dataclass
class State:
    """Internal state for cooperative cancellation tokens."""

    flag: Event = field(default_factory=Event)
    reason: Optional[str] = None
    listeners: List[Callable[[Optional[str]], None]] = field(default_factory=list)


__all__ = ["State"]
