"""Tests for the `python -m tablecompat` entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tablecompat.__main__ import main
from tablecompat.environment import EMULATOR_HOST_ENV_VAR


def test_describe_prints_resolved_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv(EMULATOR_HOST_ENV_VAR, raising=False)
    config_path = tmp_path / "config.toml"
    config_path.write_text('project_id = "proj"\ninstance_id = "inst"\nchannel_count = 2\n')

    exit_code = main(["describe", "--config", str(config_path)])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["instance_name"] == {"project_id": "proj", "instance_id": "inst"}
    assert payload["bulk_options"]["max_inflight_rpcs"] == 20


def test_describe_uses_environment_override(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv(EMULATOR_HOST_ENV_VAR, "localhost:8086")

    exit_code = main(["describe", "--config", str(tmp_path / "missing.toml")])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["data_host"] == "localhost"
    assert payload["port"] == 8086
    assert payload["credential_options"]["credential_type"] == "none"


def test_describe_reports_config_errors(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv(EMULATOR_HOST_ENV_VAR, raising=False)

    exit_code = main(["describe", "--config", str(tmp_path / "missing.toml"), "--emulator", "localhost"])

    assert exit_code == 2
    assert "malformed_emulator_address" in capsys.readouterr().err
