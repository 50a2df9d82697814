"""Promise parts package (one class per module)."""

from .promise_state import PromiseState
from .promise import Promise

__all__ = ["Promise", "PromiseState"]
