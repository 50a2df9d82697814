"""Promise public surface.

``Promise`` is the single-resolution future every adapter returns, and the
governing handle whose cancellation flag the polling waiter consults.
"""

from .promise_parts.promise_state import PromiseState
from .promise_parts.promise import Promise

__all__ = ["Promise", "PromiseState"]
