"""Common base for adapter result DTOs.

Every adapter resolves its promise with a subclass of ``ServiceResult``.
Failures reported by the wrapped service are data: ``success`` is ``False``
and ``error``/``error_code`` describe what happened.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ServiceResult(BaseModel):
    """Success flag plus optional failure description.

    Attributes:
        success: Whether the service reported success.
        error: Human-readable failure message.
        error_code: Normalized ``ErrorCode`` value (string) for the failure.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    error: Optional[str] = None
    error_code: Optional[str] = None


__all__ = ["ServiceResult"]
