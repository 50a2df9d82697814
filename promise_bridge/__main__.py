"""Allows ``python -m promise_bridge``."""

from __future__ import annotations

from .service.cli import main


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
