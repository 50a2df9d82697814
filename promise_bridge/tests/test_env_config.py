"""Adapter configuration merge order: defaults, file, env, overrides."""
from __future__ import annotations

import json

import pytest

from promise_bridge.config import DEFAULTS, get_adapter_config


def test_defaults_when_nothing_is_set():
    cfg = get_adapter_config("stamp")
    assert cfg == DEFAULTS["stamp"]  # nosec B101 - pytest assert in tests
    assert get_adapter_config("unknown") == {}  # nosec B101 - pytest assert in tests


def test_env_values_are_coerced_to_default_types(monkeypatch):
    monkeypatch.setenv("STAMP_BITS", "20")
    monkeypatch.setenv("WATCH_INTERVAL", "0.1")
    assert get_adapter_config("stamp")["bits"] == 20  # nosec B101 - pytest assert in tests
    assert get_adapter_config("watch")["interval"] == 0.1  # nosec B101 - pytest assert in tests


def test_uncoercible_env_value_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("STAMP_BITS", "lots")
    assert get_adapter_config("stamp")["bits"] == DEFAULTS["stamp"]["bits"]  # nosec B101


def test_overrides_win_but_none_is_ignored(monkeypatch):
    monkeypatch.setenv("STAMP_BITS", "20")
    assert get_adapter_config("stamp", {"bits": 4})["bits"] == 4  # nosec B101
    assert get_adapter_config("stamp", {"bits": None})["bits"] == 20  # nosec B101


def test_json_config_file_sits_between_defaults_and_env(monkeypatch, tmp_path):
    path = tmp_path / "pb.json"
    path.write_text(json.dumps({"fetch": {"user_agent": "from-file"}, "stamp": {"bits": "12"}}), encoding="utf-8")
    monkeypatch.setenv("PB_CONFIG_FILE", str(path))
    assert get_adapter_config("fetch")["user_agent"] == "from-file"  # nosec B101
    assert get_adapter_config("stamp")["bits"] == 12  # nosec B101 - pytest assert in tests
    monkeypatch.setenv("STAMP_BITS", "14")
    assert get_adapter_config("stamp")["bits"] == 14  # nosec B101 - pytest assert in tests


def test_yaml_config_file(monkeypatch, tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "pb.yaml"
    path.write_text("watch:\n  interval: 0.25\n", encoding="utf-8")
    monkeypatch.setenv("PB_CONFIG_FILE", str(path))
    assert get_adapter_config("watch")["interval"] == 0.25  # nosec B101 - pytest assert in tests
