"""DTO for a minted proof-of-work stamp."""

from __future__ import annotations

from typing import Optional

from .result_base import ServiceResult


class StampResult(ServiceResult):
    """Hashcash-style stamp and the work it took.

    Attributes:
        resource: Resource string the stamp is bound to.
        bits: Required number of leading zero bits.
        stamp: The stamp header value; ``None`` when minting failed.
        attempts: Counter values tried before success.
    """

    resource: str
    bits: int
    stamp: Optional[str] = None
    attempts: int = 0


__all__ = ["StampResult"]
