"""Hashcash-style proof-of-work adapter.

Stamps follow the version 1 layout ``1:bits:date:resource::rand:counter``. A
stamp is valid when the SHA-1 digest of the whole string starts with at least
``bits`` zero bits. Minting runs on a worker thread and checks the promise's
cancellation flag every ``check_every`` attempts.
"""

from __future__ import annotations

import hashlib
import secrets
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from ..base.bridge import Completion, OnComplete, bridge
from ..base.cancellation import CancellationToken
from ..base.dispatch import Dispatcher
from ..base.dto import StampResult
from ..base.promise import Promise
from ..config import get_adapter_config
from ..config.defaults import STAMP_VERSION
from ._service import run_service

_MAX_BITS = 160


def leading_zero_bits(digest: bytes) -> int:
    """Count the leading zero bits of ``digest``."""
    count = 0
    for byte in digest:
        if byte == 0:
            count += 8
            continue
        return count + (8 - byte.bit_length())
    return count


def _stamp_value(stamp: str) -> int:
    return leading_zero_bits(hashlib.sha1(stamp.encode("utf-8"), usedforsecurity=False).digest())


def verify_stamp(stamp: str, bits: int, resource: Optional[str] = None) -> bool:
    """Whether ``stamp`` proves ``bits`` of work (for ``resource`` if given)."""
    parts = stamp.split(":")
    if len(parts) != 7 or parts[0] != str(STAMP_VERSION):
        return False
    try:
        claimed = int(parts[1])
    except ValueError:
        return False
    if claimed < bits:
        return False
    if resource is not None and parts[3] != resource:
        return False
    return _stamp_value(stamp) >= claimed


def _mint(resource: str, bits: int, token: CancellationToken, check_every: int) -> Optional[Mapping[str, Any]]:
    date = datetime.now(timezone.utc).strftime("%y%m%d%H%M%S")
    prefix = f"{STAMP_VERSION}:{bits}:{date}:{resource}::{secrets.token_hex(8)}:"
    counter = 0
    while True:
        if counter % check_every == 0 and token.cancelled:
            return None
        stamp = f"{prefix}{counter:x}"
        counter += 1
        if _stamp_value(stamp) >= bits:
            return {"success": True, "stamp": stamp, "attempts": counter}


def _build(completion: Completion) -> StampResult:
    return StampResult(**{**completion.ambient, **completion.kwargs})


def mint_stamp(
    resource: str,
    *,
    bits: Optional[int] = None,
    dispatcher: Optional[Dispatcher] = None,
    check_every: int = 4096,
) -> Promise:
    """Search for a stamp on a worker thread; resolves to a :class:`StampResult`."""
    if ":" in resource:
        raise ValueError("resource must not contain ':'")
    required = int(get_adapter_config("stamp", {"bits": bits})["bits"])
    if not 0 <= required <= _MAX_BITS:
        raise ValueError(f"bits must be between 0 and {_MAX_BITS}, got {required}")
    token = CancellationToken()

    def invoke(on_complete: OnComplete) -> None:
        run_service(
            lambda: _mint(resource, required, token, max(1, check_every)),
            on_complete,
            name=f"stamp {resource}",
        )

    return bridge(
        invoke,
        build=_build,
        ambient=lambda: {"resource": resource, "bits": required},
        dispatcher=dispatcher,
        token=token,
        label=f"stamp {resource}",
    )


__all__ = ["leading_zero_bits", "mint_stamp", "verify_stamp"]
