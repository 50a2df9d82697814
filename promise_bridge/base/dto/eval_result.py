"""DTO for a remote code evaluation."""

from __future__ import annotations

from typing import Optional

from .result_base import ServiceResult


class EvalResult(ServiceResult):
    """Outcome of evaluating source in a child interpreter.

    Attributes:
        returncode: Interpreter exit status; ``None`` when it never finished.
        content: Captured standard output.
        stderr: Captured standard error.
    """

    returncode: Optional[int] = None
    content: str = ""
    stderr: str = ""


__all__ = ["EvalResult"]
