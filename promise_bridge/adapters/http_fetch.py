"""HTTP content fetch adapter.

The wrapped service reports only ``success`` and ``status`` to its callback;
body, headers and final URL land in a response buffer that the bridge reads
as ambient state when the callback fires.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx

from ..base.bridge import Completion, OnComplete, bridge
from ..base.dispatch import Dispatcher
from ..base.dto import FetchResult
from ..base.errors import classify_exception, classify_status
from ..base.http import get_httpx_client
from ..base.promise import Promise
from ..config import get_adapter_config
from ._service import run_service


def _build(completion: Completion) -> FetchResult:
    return FetchResult(**{**completion.ambient, **completion.kwargs})


def fetch_url(
    url: str,
    *,
    method: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = None,
    client: Optional[httpx.Client] = None,
    dispatcher: Optional[Dispatcher] = None,
) -> Promise:
    """Fetch ``url`` on a worker thread; resolves to a :class:`FetchResult`.

    Transport failures and non-2xx responses resolve with ``success=False``;
    nothing is raised.
    """
    cfg = get_adapter_config("fetch", {"method": method})
    request_headers = {"user-agent": cfg["user_agent"], **dict(headers or {})}
    http = client if client is not None else get_httpx_client()
    buffer: Dict[str, Any] = {"url": url}

    def work() -> Mapping[str, Any]:
        try:
            response = http.request(
                cfg["method"],
                url,
                headers=request_headers,
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.HTTPError as exc:
            return {
                "success": False,
                "error": str(exc) or type(exc).__name__,
                "error_code": classify_exception(exc).value,
            }
        buffer["url"] = str(response.url)
        buffer["content"] = response.text
        buffer["headers"] = {k.lower(): v for k, v in response.headers.items()}
        if response.is_success:
            return {"success": True, "status": response.status_code}
        return {
            "success": False,
            "status": response.status_code,
            "error": f"HTTP {response.status_code} {response.reason_phrase}".strip(),
            "error_code": classify_status(response.status_code).value,
        }

    def invoke(on_complete: OnComplete) -> None:
        run_service(work, on_complete, name=f"fetch {url}")

    return bridge(
        invoke,
        build=_build,
        ambient=lambda: buffer,
        dispatcher=dispatcher,
        label=f"fetch {url}",
    )


__all__ = ["fetch_url"]
