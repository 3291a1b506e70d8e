"""Tests for the settings file helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from tablecompat import settings as settings_module
from tablecompat.config import ConfigBuilder
from tablecompat.options import BulkOptions, CredentialType, RetryOptions, StatusCode
from tablecompat.settings import load_settings, save_settings


def test_load_settings_returns_defaults_when_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings_module, "CONFIG_FILE", tmp_path / "config.toml")

    result = load_settings()

    assert result == ConfigBuilder()


def test_load_settings_reads_values(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        """
project_id = "proj"
instance_id = "inst"
port = 8443
channel_count = 6
use_cached_data_pool = true

[credentials]
credential_type = "json"
key_file = "/keys/svc.json"

[retry]
initial_backoff_millis = 10
status_to_retry_on = ["UNAVAILABLE"]

[bulk]
bulk_max_row_key_count = 50
"""
    )

    builder = load_settings(config_path)
    config = builder.build()

    assert config.project_id == "proj"
    assert config.port == 8443
    assert config.channel_count == 6
    assert config.use_cached_data_pool is True
    assert config.credential_options.credential_type is CredentialType.JSON
    assert config.retry_options.initial_backoff_millis == 10
    assert config.retry_options.status_to_retry_on == frozenset({StatusCode.UNAVAILABLE})
    assert config.bulk_options.bulk_max_row_key_count == 50
    assert config.bulk_options.max_inflight_rpcs == 60
    assert config.instance_name is not None


def test_load_settings_skips_ill_typed_values(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        """
project_id = 7
port = "443"
use_plaintext_negotiation = "yes"
channel_count = true

[retry]
initial_backoff_millis = -5

[bulk]
unknown_key = 1
async_mutator_count = 3
"""
    )

    builder = load_settings(config_path)

    assert builder.project_id is None
    assert builder.port == 443
    assert builder.use_plaintext_negotiation is False
    assert builder.channel_count is None
    assert builder.retry_options == RetryOptions()
    assert builder.bulk_options == BulkOptions(async_mutator_count=3)


def test_load_settings_handles_toml_errors(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("project_id = [unterminated")

    assert load_settings(config_path) == ConfigBuilder()


def test_save_settings_round_trips(tmp_path: Path) -> None:
    config_path = tmp_path / "nested" / "config.toml"
    config = (
        ConfigBuilder(project_id="proj", instance_id="inst", user_agent='agent "quoted"', channel_count=3)
        .enable_emulator("localhost:9000")
        .build()
    )

    save_settings(config, config_path)

    content = config_path.read_text()
    assert 'project_id = "proj"' in content
    assert "[credentials]" in content
    assert "[retry]" in content
    assert "use_plaintext_negotiation = true" in content
    assert load_settings(config_path).build() == config
