"""HTTP utilities (pooled clients)."""

from .client import close_all_clients, close_client, get_httpx_client

__all__ = ["close_all_clients", "close_client", "get_httpx_client"]
