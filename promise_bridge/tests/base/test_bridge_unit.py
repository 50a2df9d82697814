"""Resolution bridge tests.

A fake one-shot service stores its payload in shared state and reports only a
success flag to the callback; the bridge must combine both at callback time,
resolve once, and ignore later spurious callbacks.
"""
from __future__ import annotations

import threading

import pytest

from promise_bridge.base.bridge import Completion, bridge
from promise_bridge.base.dispatch import Dispatcher


class _OneShotService:
    """Captures the completion callback so the test decides when it fires."""

    def __init__(self) -> None:
        self.state = {"content": None}
        self.on_complete = None

    def start(self, on_complete) -> None:
        self.on_complete = on_complete


def _build(completion: Completion) -> dict:
    return {"success": completion["success"], "content": completion.get("content")}


def test_resolves_from_callback_args_and_ambient_state(bridge_events):
    service = _OneShotService()
    promise = bridge(service.start, build=_build, ambient=lambda: service.state, label="fetch x")
    assert promise.done() is False  # nosec B101 - pytest assert in tests

    service.state["content"] = "x-content"
    service.on_complete(success=True)
    # an internal retry reports again with a different outcome
    service.state["content"] = "y-content"
    service.on_complete(success=False)

    assert promise.value(0) == {"success": True, "content": "x-content"}  # nosec B101
    assert len(bridge_events.named("bridge.resolve")) == 1  # nosec B101 - pytest assert in tests
    assert len(bridge_events.named("bridge.duplicate")) == 1  # nosec B101 - pytest assert in tests


def test_ambient_is_read_when_callback_fires_not_at_start():
    shared = {"value": "before"}
    holder = {}
    promise = bridge(lambda cb: holder.update(cb=cb), ambient=lambda: shared)

    shared["value"] = "at-callback"
    holder["cb"]()
    shared["value"] = "after"

    completion = promise.value(0)
    assert completion.ambient == {"value": "at-callback"}  # nosec B101 - pytest assert in tests


def test_default_value_is_the_completion():
    holder = {}
    promise = bridge(lambda cb: holder.update(cb=cb), ambient=lambda: {"k": "ambient", "only": 1})
    holder["cb"](1, 2, k="kw")

    completion = promise.value(0)
    assert isinstance(completion, Completion)  # nosec B101 - pytest assert in tests
    assert completion.args == (1, 2)  # nosec B101 - pytest assert in tests
    # callback keywords shadow ambient keys
    assert completion["k"] == "kw" and completion["only"] == 1  # nosec B101
    assert "only" in completion and "missing" not in completion  # nosec B101
    assert completion.get("missing", "d") == "d"  # nosec B101 - pytest assert in tests


def test_callback_that_never_fires_leaves_promise_pending():
    promise = bridge(lambda cb: None, label="silent")
    assert promise.wait(0.05) is False  # nosec B101 - pytest assert in tests
    assert promise.done() is False  # nosec B101 - pytest assert in tests


def test_invoke_errors_propagate_synchronously():
    def broken(_cb):
        raise OSError("could not start")

    with pytest.raises(OSError):
        bridge(broken)


def test_callback_from_worker_thread_resolves():
    def start(cb):
        threading.Timer(0.05, cb, kwargs={"success": True}).start()

    promise = bridge(start, build=lambda c: c["success"])
    assert promise.value(5) is True  # nosec B101 - pytest assert in tests


def test_dispatcher_defers_resolution_to_the_pumping_thread():
    dispatcher = Dispatcher()
    shared = {"n": 1}
    holder = {}
    promise = bridge(
        lambda cb: holder.update(cb=cb),
        build=lambda c: c["n"],
        ambient=lambda: shared,
        dispatcher=dispatcher,
    )

    holder["cb"]()
    shared["n"] = 2
    assert promise.done() is False and dispatcher.pending() == 1  # nosec B101

    dispatcher.run_pending()
    # the snapshot was taken when the callback fired
    assert promise.result == 1  # nosec B101 - pytest assert in tests


def test_callback_after_cancel_is_ignored():
    holder = {}
    promise = bridge(lambda cb: holder.update(cb=cb), build=lambda c: c["success"])
    promise.cancel("caller gave up")
    holder["cb"](success=True)
    assert promise.cancelled and promise.result is None  # nosec B101 - pytest assert in tests


def test_build_error_resolves_with_the_exception(bridge_events):
    def start(cb):
        threading.Timer(0.02, cb, kwargs={"success": True}).start()

    promise = bridge(start, build=lambda c: c["missing"], label="broken build")

    assert promise.wait(5) is True  # nosec B101 - pytest assert in tests
    assert isinstance(promise.result, KeyError)  # nosec B101 - pytest assert in tests
    event = bridge_events.named("bridge.build_error")[0]
    assert event["label"] == "broken build" and event["has_exc"]  # nosec B101


def test_ambient_error_resolves_with_the_exception():
    holder = {}

    def ambient():
        raise RuntimeError("state gone")

    promise = bridge(lambda cb: holder.update(cb=cb), ambient=ambient)
    holder["cb"]()
    assert isinstance(promise.result, RuntimeError)  # nosec B101 - pytest assert in tests
