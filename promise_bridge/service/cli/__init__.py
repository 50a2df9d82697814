"""promise-bridge command line interface.

``main`` parses arguments, applies the log level override and dispatches to
the handler for the chosen subcommand. A user interrupt is reported with the
conventional exit status 130.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ...base.logging import configure_logger
from .cli_actions import HANDLERS
from .cli_parser import build_parser

EXIT_INTERRUPTED = 130


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_level:
        configure_logger(level=args.log_level)
    try:
        return HANDLERS[args.cmd](args)
    except KeyboardInterrupt:
        print("interrupted")
        return EXIT_INTERRUPTED


__all__ = ["main", "EXIT_INTERRUPTED"]
