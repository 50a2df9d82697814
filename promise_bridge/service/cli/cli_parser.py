"""CLI parser construction for promise-bridge.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return parsed


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--timeout", type=_positive_float, default=None, help="Give up after this many seconds")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser with ``fetch``, ``watch``, ``stamp``, ``eval`` and ``wait``.
    """
    p = argparse.ArgumentParser(prog="promise-bridge", description="Drive callback services and process waits")
    p.add_argument("--log-level", default=None, help="Override PB_LOG_LEVEL for this run")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_fetch = sub.add_parser("fetch", help="Fetch a URL")
    p_fetch.add_argument("url")
    p_fetch.add_argument("--method", default=None)
    _add_common(p_fetch)

    p_watch = sub.add_parser("watch", help="Wait for the next change to a path")
    p_watch.add_argument("path")
    p_watch.add_argument("--interval", type=_positive_float, default=None)
    _add_common(p_watch)

    p_stamp = sub.add_parser("stamp", help="Mint a proof-of-work stamp")
    p_stamp.add_argument("resource")
    p_stamp.add_argument("--bits", type=int, default=None)
    _add_common(p_stamp)

    p_eval = sub.add_parser("eval", help="Evaluate Python source in a child interpreter")
    p_eval.add_argument("source")
    _add_common(p_eval)

    p_wait = sub.add_parser("wait", help="Run a command and print its first output")
    p_wait.add_argument("--poll-interval", type=_positive_float, default=None)
    p_wait.add_argument("--exclusive", action="store_true")
    _add_common(p_wait)
    p_wait.add_argument("argv", nargs=argparse.REMAINDER, help="Command to run (after --)")

    return p


__all__ = ["build_parser"]
