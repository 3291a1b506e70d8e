"""Tests for the policy value objects."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tablecompat.options import (
    DEFAULT_RETRY_CODES,
    MAX_INFLIGHT_RPCS_PER_CHANNEL_DEFAULT,
    BulkOptions,
    CallOptionsConfig,
    CredentialOptions,
    CredentialType,
    RetryOptions,
    StatusCode,
)


def test_retry_defaults() -> None:
    options = RetryOptions()

    assert options.enable_retries is True
    assert options.initial_backoff_millis == 5
    assert options.backoff_multiplier == 2.0
    assert options.max_elapsed_backoff_millis == 60_000
    assert options.status_to_retry_on == DEFAULT_RETRY_CODES


def test_retry_policy_respects_flags() -> None:
    options = RetryOptions(retry_on_deadline_exceeded=False)

    assert options.is_retryable(StatusCode.UNAVAILABLE) is True
    assert options.is_retryable(StatusCode.DEADLINE_EXCEEDED) is False
    assert options.is_retryable(StatusCode.INTERNAL) is False
    assert RetryOptions(enable_retries=False).is_retryable(StatusCode.UNAVAILABLE) is False


def test_retry_codes_accept_names() -> None:
    options = RetryOptions(status_to_retry_on=["INTERNAL", "UNAVAILABLE"])

    assert options.status_to_retry_on == frozenset({StatusCode.INTERNAL, StatusCode.UNAVAILABLE})


def test_with_updates_returns_validated_copy() -> None:
    options = RetryOptions()

    updated = options.with_updates(initial_backoff_millis=50)

    assert updated.initial_backoff_millis == 50
    assert options.initial_backoff_millis == 5
    with pytest.raises(ValidationError):
        options.with_updates(initial_backoff_millis=-1)


def test_unknown_fields_are_rejected() -> None:
    with pytest.raises(ValidationError):
        BulkOptions(max_inflight=3)  # type: ignore[call-arg]


def test_bulk_for_channels() -> None:
    assert BulkOptions.for_channels(4).max_inflight_rpcs == MAX_INFLIGHT_RPCS_PER_CHANNEL_DEFAULT * 4


def test_bulk_derivation_keeps_positive_limit() -> None:
    options = BulkOptions(max_inflight_rpcs=3)

    assert options.with_derived_inflight(10) is options


def test_bulk_derivation_replaces_negative_limit() -> None:
    options = BulkOptions(max_inflight_rpcs=-4, async_mutator_count=7)

    derived = options.with_derived_inflight(2)

    assert derived.max_inflight_rpcs == MAX_INFLIGHT_RPCS_PER_CHANNEL_DEFAULT * 2
    assert derived.async_mutator_count == 7


def test_call_options_timeouts() -> None:
    assert CallOptionsConfig().timeout_ms() is None
    enabled = CallOptionsConfig(use_timeout=True, short_rpc_timeout_ms=100, long_rpc_timeout_ms=1000)
    assert enabled.timeout_ms() == 100
    assert enabled.timeout_ms(streaming=True) == 1000


def test_credential_factories() -> None:
    assert CredentialOptions.default_credentials().credential_type is CredentialType.DEFAULT
    assert CredentialOptions.null_credential().credential_type is CredentialType.NONE
    p12 = CredentialOptions.p12_credential("svc@example.com", "/keys/svc.p12")
    assert p12.service_account == "svc@example.com"
    assert CredentialOptions.json_credentials("/keys/svc.json").key_file == "/keys/svc.json"


def test_credentials_require_key_material() -> None:
    with pytest.raises(ValidationError):
        CredentialOptions(credential_type=CredentialType.P12, service_account="svc@example.com")
    with pytest.raises(ValidationError):
        CredentialOptions(credential_type=CredentialType.JSON)


def test_value_objects_compare_by_value() -> None:
    assert BulkOptions(max_inflight_rpcs=5) == BulkOptions(max_inflight_rpcs=5)
    assert hash(RetryOptions()) == hash(RetryOptions())
    assert CredentialOptions.null_credential() != CredentialOptions.default_credentials()
