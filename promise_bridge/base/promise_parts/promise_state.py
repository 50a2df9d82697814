"""Promise lifecycle states."""

from __future__ import annotations

from enum import Enum


class PromiseState(str, Enum):
    """``PENDING`` transitions at most once, to ``RESOLVED`` or ``CANCELLED``."""

    PENDING = "pending"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"


__all__ = ["PromiseState"]
