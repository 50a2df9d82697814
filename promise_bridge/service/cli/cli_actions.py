"""Subcommand handlers for the promise-bridge CLI.

Each handler returns a process exit code:

- ``0`` the service succeeded / output arrived
- ``1`` the service reported failure
- ``2`` no result within the timeout, or the command produced no output
"""

from __future__ import annotations

import argparse
import json
from typing import Optional, Union

from ...adapters import evaluate, fetch_url, mint_stamp, watch_file
from ...base.dto import ServiceResult
from ...base.errors import classify_exception
from ...base.process import PopenProcess
from ...base.promise import Promise
from ...base.waiter import WaitOutcome, WaitSession

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_RESULT = 2


def _await(promise: Promise, timeout: Optional[float]) -> Union[ServiceResult, Exception, None]:
    try:
        if not promise.wait(timeout):
            promise.cancel("cli timeout")
            return None
    except KeyboardInterrupt:
        promise.cancel("interrupted")
        raise
    return promise.result


def _report(result: Union[ServiceResult, Exception, None], as_json: bool, text_field: str) -> int:
    if result is None:
        print(json.dumps({"success": False, "error": "timed out"}) if as_json else "timed out")
        return EXIT_NO_RESULT
    if isinstance(result, Exception):
        code = classify_exception(result).value
        print(json.dumps({"success": False, "error": str(result), "error_code": code}) if as_json else f"error ({code}): {result}")
        return EXIT_FAILED
    if as_json:
        print(result.model_dump_json())
    elif result.success:
        print(getattr(result, text_field))
    else:
        print(f"error ({result.error_code}): {result.error}")
    return EXIT_OK if result.success else EXIT_FAILED


def do_fetch(args: argparse.Namespace) -> int:
    promise = fetch_url(args.url, method=args.method, timeout=args.timeout)
    return _report(_await(promise, args.timeout), args.json, "content")


def do_watch(args: argparse.Namespace) -> int:
    promise = watch_file(args.path, interval=args.interval)
    return _report(_await(promise, args.timeout), args.json, "change")


def do_stamp(args: argparse.Namespace) -> int:
    promise = mint_stamp(args.resource, bits=args.bits)
    return _report(_await(promise, args.timeout), args.json, "stamp")


def do_eval(args: argparse.Namespace) -> int:
    promise = evaluate(args.source, timeout=args.timeout)
    return _report(_await(promise, None), args.json, "content")


def do_wait(args: argparse.Namespace) -> int:
    argv = list(args.argv)
    if argv[:1] == ["--"]:
        argv = argv[1:]
    if not argv:
        print("wait: no command given")
        return EXIT_FAILED
    governing: Promise = Promise(label="cli wait")
    with PopenProcess(argv) as process:
        report = WaitSession(
            process,
            governing=governing,
            timeout=args.timeout,
            exclusive=args.exclusive,
            poll_interval=args.poll_interval,
            label="cli",
        ).run()
    if args.json:
        print(
            json.dumps(
                {
                    "outcome": report.outcome.value,
                    "data": report.data,
                    "elapsed": report.elapsed,
                    "attempts": report.attempts,
                }
            )
        )
    elif report.data is not None:
        print(report.data, end="")
    else:
        print(report.outcome.value)
    return EXIT_OK if report.outcome is WaitOutcome.COMPLETED else EXIT_NO_RESULT


HANDLERS = {
    "fetch": do_fetch,
    "watch": do_watch,
    "stamp": do_stamp,
    "eval": do_eval,
    "wait": do_wait,
}


__all__ = ["HANDLERS", "EXIT_OK", "EXIT_FAILED", "EXIT_NO_RESULT"]
