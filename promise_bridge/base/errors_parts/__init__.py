"""Errors parts package public surface.

Prefer importing from ``promise_bridge.base.errors`` for the stable surface.
"""

from .error_code import ErrorCode
from .bridge_error import BridgeError
from .classification import classify_exception, classify_status

__all__ = ["ErrorCode", "BridgeError", "classify_exception", "classify_status"]
