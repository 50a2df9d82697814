"""Error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``promise_bridge.base.errors_parts`` behind a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.bridge_error import BridgeError
from .errors_parts.classification import classify_exception, classify_status

__all__ = ["ErrorCode", "BridgeError", "classify_exception", "classify_status"]
