"""Adapter result DTOs (Pydantic v2)."""

from .result_base import ServiceResult
from .fetch_result import FetchResult
from .watch_event import ChangeKind, WatchEvent
from .stamp_result import StampResult
from .eval_result import EvalResult

__all__ = [
    "ChangeKind",
    "EvalResult",
    "FetchResult",
    "ServiceResult",
    "StampResult",
    "WatchEvent",
]
