"""Real child-process tests for ``PopenProcess`` and the polling waiter.

Child processes are short Python scripts run with ``sys.executable``.
"""
from __future__ import annotations

import sys
import time

import pytest

from promise_bridge.base.cancellation import CancellationToken
from promise_bridge.base.dispatch import Dispatcher
from promise_bridge.base.errors import BridgeError, ErrorCode
from promise_bridge.base.process import ExternalProcess, PopenProcess
from promise_bridge.base.waiter import WaitOutcome, WaitSession, poll_wait

READY_THEN_SLEEP = "import time; print('ready', flush=True); time.sleep(30)"
SILENT = "import time; time.sleep(30)"


def _python(code: str):
    return [sys.executable, "-u", "-c", code]


def test_satisfies_external_process_protocol():
    with PopenProcess(_python(SILENT)) as process:
        assert isinstance(process, ExternalProcess)  # nosec B101 - pytest assert in tests
        assert process.is_live()  # nosec B101 - pytest assert in tests


def test_wait_for_output_returns_first_line():
    with PopenProcess(_python(READY_THEN_SLEEP)) as process:
        assert process.wait_for_output(10.0) == "ready\n"  # nosec B101 - pytest assert in tests
        assert process.wait_for_output(0.05) is None  # nosec B101 - pytest assert in tests


def test_terminate_stops_the_process():
    process = PopenProcess(_python(SILENT))
    process.terminate(grace=5.0)
    assert not process.is_live() and process.returncode is not None  # nosec B101


def test_poll_wait_returns_output_from_live_process():
    with PopenProcess(_python(READY_THEN_SLEEP)) as process:
        data = poll_wait(process, 10.0, poll_interval=0.1, governing=CancellationToken())
    assert data == "ready\n"  # nosec B101 - pytest assert in tests


def test_deadline_holds_in_real_time():
    with PopenProcess(_python(SILENT)) as process:
        started = time.monotonic()
        report = WaitSession(process, governing=CancellationToken(), timeout=0.3, poll_interval=0.1).run()
        wall = time.monotonic() - started
    assert report.outcome is WaitOutcome.TIMED_OUT  # nosec B101 - pytest assert in tests
    assert 0.25 <= wall < 2.0  # nosec B101 - pytest assert in tests
    assert report.attempts >= 3  # nosec B101 - pytest assert in tests


def test_exited_process_ends_session_without_output():
    with PopenProcess(_python("pass")) as process:
        report = WaitSession(process, governing=CancellationToken(), timeout=10.0, poll_interval=0.05).run()
    assert report.outcome is WaitOutcome.PROCESS_EXITED  # nosec B101 - pytest assert in tests
    assert report.data is None  # nosec B101 - pytest assert in tests


def test_non_exclusive_wait_pumps_dispatcher():
    dispatcher = Dispatcher()
    seen = []
    with PopenProcess(_python(SILENT), dispatcher=dispatcher) as process:
        dispatcher.call_soon(seen.append, "ran")
        assert process.wait_for_output(0.2, exclusive=False) is None  # nosec B101
    assert seen == ["ran"]  # nosec B101 - pytest assert in tests


def test_exclusive_wait_leaves_dispatcher_alone():
    dispatcher = Dispatcher()
    seen = []
    with PopenProcess(_python(SILENT), dispatcher=dispatcher) as process:
        dispatcher.call_soon(seen.append, "ran")
        assert process.wait_for_output(0.2, exclusive=True) is None  # nosec B101
    assert seen == [] and dispatcher.pending() == 1  # nosec B101 - pytest assert in tests


def test_send_to_exited_process_raises_unavailable():
    process = PopenProcess(_python("pass"))
    process.terminate(grace=5.0)
    with pytest.raises(BridgeError) as info:
        process.send("hello\n")
    assert info.value.code is ErrorCode.UNAVAILABLE  # nosec B101 - pytest assert in tests


def test_missing_executable_raises_on_start():
    with pytest.raises(FileNotFoundError):
        PopenProcess(["definitely-not-a-real-binary-4f1c"])


def test_output_of_already_exited_process_is_still_returned():
    with PopenProcess(_python("print('hi')")) as process:
        time.sleep(0.5)
        report = WaitSession(process, governing=CancellationToken(), timeout=5.0, poll_interval=0.1).run()
        assert report.outcome is WaitOutcome.COMPLETED and report.data == "hi\n"  # nosec B101
        # everything has been handed out; the next check sees the exit
        assert process.is_live() is False  # nosec B101 - pytest assert in tests


def test_terminate_ends_liveness_once_output_was_read():
    process = PopenProcess(_python("print('bye', flush=True); import time; time.sleep(30)"))
    assert process.wait_for_output(10.0) == "bye\n"  # nosec B101 - pytest assert in tests
    process.terminate(grace=5.0)
    assert process.is_live() is False  # nosec B101 - pytest assert in tests
