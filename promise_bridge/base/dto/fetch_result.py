"""DTO for a completed HTTP fetch."""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import Field

from .result_base import ServiceResult


class FetchResult(ServiceResult):
    """Response captured by the fetch adapter.

    Attributes:
        url: Final URL after redirects (the requested URL on transport errors).
        status: HTTP status code; ``None`` when no response arrived.
        content: Decoded response body (empty on transport errors).
        headers: Response headers with lower-cased names.
    """

    url: str
    status: Optional[int] = None
    content: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)


__all__ = ["FetchResult"]
