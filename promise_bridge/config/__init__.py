"""Adapter configuration layer.

Goals
-----
* Centralize adapter defaults (fetch user agent, watch interval, stamp bits).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by PB_CONFIG_FILE
    3. Environment variables ``<ADAPTER>_<FIELD>`` (e.g. ``STAMP_BITS``)
    4. In-code overrides passed to the helper
* Single call site: ``get_adapter_config(name)``.

External Config File (Optional)
-------------------------------
JSON is tried first; YAML is used when that fails and PyYAML is installed.

```
watch:
  interval: 0.25
stamp:
  bits: 20
```

Environment values are strings; fields whose default is numeric are coerced
to the default's type, falling back to the default when coercion fails.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .defaults import (
    EVAL_DEFAULT_TIMEOUT_SECONDS,
    FETCH_DEFAULT_METHOD,
    FETCH_DEFAULT_USER_AGENT,
    STAMP_DEFAULT_BITS,
    WATCH_DEFAULT_INTERVAL_SECONDS,
)

try:  # Optional YAML support
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "fetch": {"method": FETCH_DEFAULT_METHOD, "user_agent": FETCH_DEFAULT_USER_AGENT},
    "watch": {"interval": WATCH_DEFAULT_INTERVAL_SECONDS},
    "stamp": {"bits": STAMP_DEFAULT_BITS},
    "eval": {"timeout": EVAL_DEFAULT_TIMEOUT_SECONDS},
}


_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the file named by ``PB_CONFIG_FILE`` (empty when unset)."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv("PB_CONFIG_FILE") or None
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    _FILE_CACHE_PATH = path
    data: Any = {}
    if path and Path(path).is_file():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            data = yaml.safe_load(text) if yaml is not None else {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def _coerce(value: Any, default: Any) -> Any:
    if isinstance(default, bool) or default is None or not isinstance(value, str):
        return value
    if isinstance(default, (int, float)):
        try:
            return type(default)(value)
        except ValueError:
            return default
    return value


def _env_overrides(name: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = name.upper()
    for field, default in DEFAULTS.get(name, {}).items():
        val = os.getenv(f"{prefix}_{field.upper()}")
        if val is not None:
            out[field] = _coerce(val, default)
    return out


def get_adapter_config(name: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for an adapter.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    key = (name or "").lower().strip()
    defaults = DEFAULTS.get(key, {})
    cfg: Dict[str, Any] = dict(defaults)

    file_cfg = _load_external_config().get(key)
    if isinstance(file_cfg, dict):
        cfg |= {k: _coerce(v, defaults.get(k)) for k, v in file_cfg.items()}

    cfg |= _env_overrides(key)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


__all__ = ["DEFAULTS", "get_adapter_config"]
