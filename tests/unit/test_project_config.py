"""Tests for the environment snapshot and project config persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from aidd.config import AiddEnvironment, read_config, write_config


def test_read_missing_config_returns_empty(tmp_path: Path) -> None:
    assert read_config(tmp_path / "aidd.config.json") == {}


def test_read_malformed_config_returns_empty(tmp_path: Path) -> None:
    config_file = tmp_path / "aidd.config.json"
    config_file.write_text("{not json", encoding="utf-8")

    assert read_config(config_file) == {}


def test_read_non_object_config_returns_empty(tmp_path: Path) -> None:
    config_file = tmp_path / "aidd.config.json"
    config_file.write_text("[1, 2, 3]", encoding="utf-8")

    assert read_config(config_file) == {}


def test_write_merges_and_last_write_wins(tmp_path: Path) -> None:
    config_file = tmp_path / "aidd.config.json"

    write_config({"a": 1}, config_file)
    write_config({"b": 2}, config_file)
    assert read_config(config_file) == {"a": 1, "b": 2}

    merged = write_config({"a": 3}, config_file)
    assert merged == {"a": 3, "b": 2}
    assert read_config(config_file) == {"a": 3, "b": 2}


def test_write_creates_file_lazily(tmp_path: Path) -> None:
    config_file = tmp_path / "nested" / "aidd.config.json"

    write_config({"create-uri": "https://github.com/org/scaffold"}, config_file)

    payload = json.loads(config_file.read_text(encoding="utf-8"))
    assert payload == {"create-uri": "https://github.com/org/scaffold"}


def test_write_replaces_malformed_file(tmp_path: Path) -> None:
    config_file = tmp_path / "aidd.config.json"
    config_file.write_text("garbage", encoding="utf-8")

    assert write_config({"a": 1}, config_file) == {"a": 1}


def test_write_failure_propagates(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(OSError):
        write_config({"a": 1}, blocker / "aidd.config.json")


def test_environment_snapshot_reads_known_variables() -> None:
    env = AiddEnvironment.from_env(
        {"GITHUB_TOKEN": " secret ", "AIDD_CUSTOM_CREATE_URI": "file:///tmp/x", "OTHER": "1"}
    )

    assert env.github_token == "secret"
    assert env.create_uri == "file:///tmp/x"


def test_environment_snapshot_treats_blank_as_unset() -> None:
    env = AiddEnvironment.from_env({"GITHUB_TOKEN": "  ", "AIDD_CUSTOM_CREATE_URI": ""})

    assert env.github_token is None
    assert env.create_uri is None


def test_environment_snapshot_defaults_to_process_env(monkeypatch) -> None:
    monkeypatch.setenv("AIDD_CUSTOM_CREATE_URI", "scaffold-example")
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)

    env = AiddEnvironment.from_env()

    assert env.create_uri == "scaffold-example"
    assert env.github_token is None
