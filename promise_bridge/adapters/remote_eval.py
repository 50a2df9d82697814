"""Remote code evaluation adapter.

Evaluates Python source in a child interpreter (``sys.executable -c``) on a
worker thread and calls back once with the exit status and captured output.
A non-zero exit or a timeout is reported as ``success=False``.
"""

from __future__ import annotations

import subprocess  # nosec B404 - fixed argv (interpreter path, "-c", source); shell=False
import sys
from typing import Any, Mapping, Optional, Union

from ..base.bridge import Completion, OnComplete, bridge
from ..base.dispatch import Dispatcher
from ..base.dto import EvalResult
from ..base.errors import ErrorCode
from ..base.promise import Promise
from ..config import get_adapter_config
from ._service import run_service


def _text(value: Union[str, bytes, None]) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _evaluate(argv: list, timeout: float) -> Mapping[str, Any]:
    try:
        completed = subprocess.run(  # nosec B603 - argv list, no shell
            argv,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        return {
            "success": False,
            "content": _text(exc.stdout),
            "stderr": _text(exc.stderr),
            "error": f"evaluation exceeded {timeout}s",
            "error_code": ErrorCode.TIMEOUT.value,
        }
    if completed.returncode == 0:
        return {"success": True, "returncode": 0, "content": completed.stdout, "stderr": completed.stderr}
    last_line = completed.stderr.strip().splitlines()[-1:] or [f"exit status {completed.returncode}"]
    return {
        "success": False,
        "returncode": completed.returncode,
        "content": completed.stdout,
        "stderr": completed.stderr,
        "error": last_line[0],
        "error_code": ErrorCode.PROCESS_FAILED.value,
    }


def _build(completion: Completion) -> EvalResult:
    return EvalResult(**completion.kwargs)


def evaluate(
    source: str,
    *,
    timeout: Optional[float] = None,
    executable: Optional[str] = None,
    dispatcher: Optional[Dispatcher] = None,
) -> Promise:
    """Evaluate ``source``; resolves to an :class:`EvalResult`."""
    limit = float(get_adapter_config("eval", {"timeout": timeout})["timeout"])
    argv = [executable or sys.executable, "-c", source]

    def invoke(on_complete: OnComplete) -> None:
        run_service(lambda: _evaluate(argv, limit), on_complete, name="eval")

    return bridge(invoke, build=_build, dispatcher=dispatcher, label="eval")


__all__ = ["evaluate"]
