"""Unified timeout configuration for waits, tasks and adapters.

This module centralizes the time budgets used across the package (polling
waiter interval, default overall deadline, HTTP request timeout) so no ad-hoc
numeric literals are scattered through the adapters.

Key Components
--------------
TimeoutConfig
    Frozen dataclass capturing normalized timeout values.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and whenever one of the watched variables changes. Supported
    environment variables (all optional):
        PB_POLL_INTERVAL_SECONDS
        PB_WAIT_TIMEOUT_SECONDS
        PB_HTTP_TIMEOUT_SECONDS
        PB_REQUIRE_DEADLINE

Failure Modes
-------------
Unparsable or non-positive values fall back to the defaults; configuration
lookup never raises.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_POLL_INTERVAL_SECONDS = 1.0
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0

_WATCHED_ENV = (
    "PB_POLL_INTERVAL_SECONDS",
    "PB_WAIT_TIMEOUT_SECONDS",
    "PB_HTTP_TIMEOUT_SECONDS",
    "PB_REQUIRE_DEADLINE",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        poll_interval_seconds: Per-iteration wait budget of the polling waiter.
            Cancellation is observed at least this often.
        overall_timeout_seconds: Default overall deadline for a wait session
            when the caller supplies none. ``None`` means unbounded.
        http_timeout_seconds: Timeout for a single HTTP fetch.
        require_deadline: Reject wait sessions that end up with no deadline.
    """

    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    overall_timeout_seconds: float | None = None
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    require_deadline: bool = False


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def _parse_env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached ``TimeoutConfig`` instance.

    The cache is refreshed when any watched environment variable changes so
    tests can adjust values with ``monkeypatch.setenv``.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - intentional, documented module cache
    cur_guard = "/".join(os.getenv(name, "") for name in _WATCHED_ENV)
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    poll = _parse_env_float("PB_POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS)
    overall = _parse_env_float("PB_WAIT_TIMEOUT_SECONDS", None)
    http = _parse_env_float("PB_HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS)

    _CACHED = TimeoutConfig(
        poll_interval_seconds=float(poll),
        overall_timeout_seconds=float(overall) if overall is not None else None,
        http_timeout_seconds=float(http),
        require_deadline=_parse_env_bool("PB_REQUIRE_DEADLINE"),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


__all__ = [
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "TimeoutConfig",
    "get_timeout_config",
]
