"""DTO for a one-shot filesystem change notification."""

from __future__ import annotations

from typing import Literal, Optional

from .result_base import ServiceResult

ChangeKind = Literal["created", "modified", "deleted"]


class WatchEvent(ServiceResult):
    """First change observed on a watched path.

    Attributes:
        path: The watched path.
        change: Kind of change; ``None`` when the watch failed.
        mtime: Modification time after the change (``None`` when deleted).
    """

    path: str
    change: Optional[ChangeKind] = None
    mtime: Optional[float] = None


__all__ = ["ChangeKind", "WatchEvent"]
