"""Immutable policy objects composed into a connection configuration."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

MAX_INFLIGHT_RPCS_PER_CHANNEL_DEFAULT = 10
ASYNC_MUTATOR_COUNT_DEFAULT = 2
BULK_MAX_ROW_KEY_COUNT_DEFAULT = 125
BULK_MAX_REQUEST_SIZE_BYTES_DEFAULT = 128 * 1024
MAX_MEMORY_DEFAULT = 128 * 1024 * 1024
BULK_MUTATION_RPC_TARGET_MS_DEFAULT = 100

SHORT_RPC_TIMEOUT_MS_DEFAULT = 60_000
LONG_RPC_TIMEOUT_MS_DEFAULT = 600_000


class _FrozenOptions(BaseModel):
    """Base for the small option objects: frozen, field-wise equality, hashable."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def with_updates(self, **changes: Any) -> Any:
        """Return a validated copy with the given fields replaced."""

        return type(self).model_validate({**self.model_dump(), **changes})


class StatusCode(str, Enum):
    """Remote call status codes a retry policy can react to."""

    CANCELLED = "CANCELLED"
    UNKNOWN = "UNKNOWN"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"
    RESOURCE_EXHAUSTED = "RESOURCE_EXHAUSTED"
    ABORTED = "ABORTED"
    INTERNAL = "INTERNAL"
    UNAVAILABLE = "UNAVAILABLE"
    UNAUTHENTICATED = "UNAUTHENTICATED"


DEFAULT_RETRY_CODES = frozenset(
    {
        StatusCode.DEADLINE_EXCEEDED,
        StatusCode.UNAVAILABLE,
        StatusCode.ABORTED,
        StatusCode.UNAUTHENTICATED,
    }
)


class CredentialType(str, Enum):
    """Where authentication material comes from."""

    DEFAULT = "default"
    P12 = "p12"
    JSON = "json"
    NONE = "none"


class CredentialOptions(_FrozenOptions):
    """Source of the credentials used to authenticate against the service."""

    credential_type: CredentialType = CredentialType.DEFAULT
    service_account: str | None = None
    key_file: str | None = None

    @model_validator(mode="after")
    def _check_key_material(self) -> CredentialOptions:
        if self.credential_type is CredentialType.P12 and not (self.service_account and self.key_file):
            raise ValueError("P12 credentials need both a service account and a key file")
        if self.credential_type is CredentialType.JSON and not self.key_file:
            raise ValueError("JSON credentials need a key file")
        return self

    @classmethod
    def default_credentials(cls) -> CredentialOptions:
        """Resolve credentials from the platform's well known locations."""

        return cls()

    @classmethod
    def null_credential(cls) -> CredentialOptions:
        """No authentication at all (emulator and tests)."""

        return cls(credential_type=CredentialType.NONE)

    @classmethod
    def p12_credential(cls, service_account: str, key_file: str) -> CredentialOptions:
        return cls(credential_type=CredentialType.P12, service_account=service_account, key_file=key_file)

    @classmethod
    def json_credentials(cls, key_file: str) -> CredentialOptions:
        return cls(credential_type=CredentialType.JSON, key_file=key_file)


class RetryOptions(_FrozenOptions):
    """Retry policy handed to the downstream execution engine."""

    enable_retries: bool = True
    retry_on_deadline_exceeded: bool = True
    initial_backoff_millis: int = Field(default=5, ge=0)
    backoff_multiplier: float = Field(default=2.0, ge=1.0)
    max_elapsed_backoff_millis: int = Field(default=60_000, ge=0)
    streaming_buffer_size: int = Field(default=60, ge=1)
    read_partial_row_timeout_millis: int = Field(default=60_000, ge=0)
    max_scan_timeout_retries: int = Field(default=3, ge=0)
    allow_retries_without_timestamp: bool = False
    status_to_retry_on: frozenset[StatusCode] = DEFAULT_RETRY_CODES

    def is_retryable(self, code: StatusCode) -> bool:
        """Whether a failed call with the given status should be retried."""

        if not self.enable_retries:
            return False
        if code is StatusCode.DEADLINE_EXCEEDED and not self.retry_on_deadline_exceeded:
            return False
        return code in self.status_to_retry_on


class BulkOptions(_FrozenOptions):
    """Batching limits for bulk mutations.

    ``max_inflight_rpcs`` at or below zero means "derive from the channel count";
    the connection builder fills it in.
    """

    async_mutator_count: int = Field(default=ASYNC_MUTATOR_COUNT_DEFAULT, ge=0)
    use_bulk_api: bool = True
    bulk_max_row_key_count: int = Field(default=BULK_MAX_ROW_KEY_COUNT_DEFAULT, ge=1)
    bulk_max_request_size: int = Field(default=BULK_MAX_REQUEST_SIZE_BYTES_DEFAULT, ge=1)
    max_inflight_rpcs: int = -1
    max_memory: int = Field(default=MAX_MEMORY_DEFAULT, ge=1)
    enable_bulk_mutation_throttling: bool = False
    bulk_mutation_rpc_target_ms: int = Field(default=BULK_MUTATION_RPC_TARGET_MS_DEFAULT, ge=1)

    @classmethod
    def for_channels(cls, channel_count: int) -> BulkOptions:
        """Default bulk options sized for ``channel_count`` data channels."""

        return cls(max_inflight_rpcs=MAX_INFLIGHT_RPCS_PER_CHANNEL_DEFAULT * channel_count)

    def with_derived_inflight(self, channel_count: int) -> BulkOptions:
        """Fill in a non-positive in-flight limit, keeping every other field."""

        if self.max_inflight_rpcs > 0:
            return self
        return self.with_updates(max_inflight_rpcs=MAX_INFLIGHT_RPCS_PER_CHANNEL_DEFAULT * channel_count)


class CallOptionsConfig(_FrozenOptions):
    """Per-call deadline policy."""

    use_timeout: bool = False
    short_rpc_timeout_ms: int = Field(default=SHORT_RPC_TIMEOUT_MS_DEFAULT, ge=1)
    long_rpc_timeout_ms: int = Field(default=LONG_RPC_TIMEOUT_MS_DEFAULT, ge=1)

    def timeout_ms(self, *, streaming: bool = False) -> int | None:
        if not self.use_timeout:
            return None
        return self.long_rpc_timeout_ms if streaming else self.short_rpc_timeout_ms


__all__ = [
    "BulkOptions",
    "CallOptionsConfig",
    "CredentialOptions",
    "CredentialType",
    "DEFAULT_RETRY_CODES",
    "MAX_INFLIGHT_RPCS_PER_CHANNEL_DEFAULT",
    "RetryOptions",
    "StatusCode",
]
