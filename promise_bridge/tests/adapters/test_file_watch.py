"""File watch adapter tests using ``tmp_path`` and a short poll interval."""
from __future__ import annotations

import pytest

from promise_bridge.adapters import watch_file

INTERVAL = 0.02


def test_creation_is_reported(tmp_path):
    target = tmp_path / "new.txt"
    promise = watch_file(target, interval=INTERVAL)
    target.write_text("hello", encoding="utf-8")
    event = promise.value(5)
    assert event.success and event.change == "created"  # nosec B101 - pytest assert in tests
    assert event.path == str(target) and event.mtime is not None  # nosec B101


def test_modification_is_reported(tmp_path):
    target = tmp_path / "existing.txt"
    target.write_text("a", encoding="utf-8")
    promise = watch_file(target, interval=INTERVAL)
    target.write_text("a longer body", encoding="utf-8")
    assert promise.value(5).change == "modified"  # nosec B101 - pytest assert in tests


def test_deletion_is_reported(tmp_path):
    target = tmp_path / "doomed.txt"
    target.write_text("bye", encoding="utf-8")
    promise = watch_file(target, interval=INTERVAL)
    target.unlink()
    event = promise.value(5)
    assert event.change == "deleted" and event.mtime is None  # nosec B101


def test_unchanged_path_stays_pending_until_cancelled(tmp_path):
    promise = watch_file(tmp_path / "never.txt", interval=INTERVAL)
    assert promise.wait(0.1) is False  # nosec B101 - pytest assert in tests
    assert promise.cancel("done watching") is True  # nosec B101 - pytest assert in tests
    assert promise.cancelled  # nosec B101 - pytest assert in tests


def test_non_positive_interval_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        watch_file(tmp_path / "x", interval=0)
