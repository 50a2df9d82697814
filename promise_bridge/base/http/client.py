"""Pooled ``httpx.Client`` instances for the fetch adapter.

Clients are cached per ``(base_url, purpose)`` key and built with the HTTP
timeout from :func:`get_timeout_config`, redirect following and the
configured fetch user agent. Individual requests may still pass their own
timeout.

All pooled clients are closed at interpreter exit; tests reset the pool with
:func:`close_all_clients`.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict, Optional, Tuple

import httpx

from ...config import get_adapter_config
from ..timeouts import get_timeout_config

_Key = Tuple[Optional[str], str]

_CLIENTS: Dict[_Key, httpx.Client] = {}
_LOCK = threading.RLock()


def _build_client(base_url: Optional[str]) -> httpx.Client:
    options = {
        "timeout": get_timeout_config().http_timeout_seconds,
        "follow_redirects": True,
        "headers": {"user-agent": get_adapter_config("fetch")["user_agent"]},
    }
    if base_url:
        options["base_url"] = base_url
    return httpx.Client(**options)


def get_httpx_client(base_url: Optional[str] = None, purpose: str = "fetch") -> httpx.Client:
    """Return the pooled client for ``(base_url, purpose)``, creating it once.

    Safe for concurrent use.
    """
    key = (base_url, purpose)
    with _LOCK:
        client = _CLIENTS.get(key)
        if client is None or client.is_closed:
            client = _CLIENTS[key] = _build_client(base_url)
        return client


def close_client(base_url: Optional[str] = None, purpose: str = "fetch") -> bool:
    """Close and forget one pooled client; ``False`` when none was pooled."""
    with _LOCK:
        client = _CLIENTS.pop((base_url, purpose), None)
    if client is None:
        return False
    client.close()
    return True


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        clients = list(_CLIENTS.values())
        _CLIENTS.clear()
    for client in clients:
        try:
            client.close()
        except Exception:  # nosec B110 - best-effort shutdown; safe to ignore close errors
            pass


atexit.register(close_all_clients)


__all__ = ["close_all_clients", "close_client", "get_httpx_client"]
