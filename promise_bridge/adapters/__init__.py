"""Adapters wrapping one-shot callback services as promises."""

from .file_watch import watch_file
from .http_fetch import fetch_url
from .proof_of_work import leading_zero_bits, mint_stamp, verify_stamp
from .remote_eval import evaluate
from .repl import ReplSession

__all__ = [
    "ReplSession",
    "evaluate",
    "fetch_url",
    "leading_zero_bits",
    "mint_stamp",
    "verify_stamp",
    "watch_file",
]
