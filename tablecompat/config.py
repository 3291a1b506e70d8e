"""Connection configuration model and the builder that derives and validates it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from .environment import EMULATOR_HOST_ENV_VAR, default_channel_count
from .errors import ConfigError, ConfigErrorKind
from .options import BulkOptions, CallOptionsConfig, CredentialOptions, RetryOptions

LOG = logging.getLogger(__name__)

ADMIN_HOST_DEFAULT = "bigtableadmin.googleapis.com"
DATA_HOST_DEFAULT = "bigtable.googleapis.com"
PORT_DEFAULT = 443
# Empty selects the server's default app profile.
APP_PROFILE_DEFAULT = ""


class InstanceName(BaseModel):
    """Fully qualified name of a logical instance."""

    model_config = ConfigDict(frozen=True)

    project_id: str = Field(min_length=1)
    instance_id: str = Field(min_length=1)

    def __str__(self) -> str:
        return f"projects/{self.project_id}/instances/{self.instance_id}"

    def table_name(self, table_id: str) -> str:
        """Qualified name of a table inside this instance."""

        return f"{self}/tables/{table_id}"


class ConnectionConfig(BaseModel):
    """Immutable connection and runtime configuration.

    Build instances through :class:`ConfigBuilder`, which supplies defaults. A
    non-positive bulk in-flight limit is derived from ``channel_count`` on every
    construction path. ``instance_name`` is always derived from
    the project and instance ids and is ``None`` unless both are non-empty.
    Equal field values compare and hash equal, so configurations can key shared
    resource caches.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    admin_host: str = Field(default=ADMIN_HOST_DEFAULT, min_length=1)
    data_host: str = Field(default=DATA_HOST_DEFAULT, min_length=1)
    port: int = PORT_DEFAULT
    project_id: str | None = None
    instance_id: str | None = None
    app_profile_id: str = APP_PROFILE_DEFAULT
    user_agent: str | None = None
    channel_count: int = Field(default_factory=default_channel_count, ge=1)
    use_plaintext_negotiation: bool = False
    use_cached_data_pool: bool = False
    credential_options: CredentialOptions = Field(default_factory=CredentialOptions.default_credentials)
    retry_options: RetryOptions = Field(default_factory=RetryOptions)
    bulk_options: BulkOptions = Field(default_factory=BulkOptions)
    call_options: CallOptionsConfig = Field(default_factory=CallOptionsConfig)

    @model_validator(mode="before")
    @classmethod
    def _derive_bulk_inflight(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        derived = dict(data)
        channel_count = derived.get("channel_count")
        if channel_count is None:
            channel_count = derived["channel_count"] = default_channel_count()
        if not isinstance(channel_count, int) or isinstance(channel_count, bool):
            return derived
        bulk_options = derived.get("bulk_options")
        if bulk_options is None:
            derived["bulk_options"] = BulkOptions.for_channels(channel_count)
        elif isinstance(bulk_options, BulkOptions):
            derived["bulk_options"] = bulk_options.with_derived_inflight(channel_count)
        elif isinstance(bulk_options, dict):
            derived["bulk_options"] = BulkOptions.model_validate(bulk_options).with_derived_inflight(channel_count)
        return derived

    @computed_field  # type: ignore[prop-decorator]
    @property
    def instance_name(self) -> InstanceName | None:
        """Derived from the ids; ``None`` unless both are non-empty."""

        if self.project_id and self.instance_id:
            return InstanceName(project_id=self.project_id, instance_id=self.instance_id)
        return None

    def to_builder(self) -> ConfigBuilder:
        """Return a builder holding a snapshot of every field."""

        return ConfigBuilder.from_existing(self)


@dataclass(slots=True)
class ConfigBuilder:
    """Mutable staging area for a :class:`ConnectionConfig`.

    Assigning fields never validates; every check happens in :meth:`build`.
    ``channel_count`` left as ``None`` is resolved through ``channel_count_policy``.
    """

    project_id: str | None = None
    instance_id: str | None = None
    app_profile_id: str | None = APP_PROFILE_DEFAULT
    user_agent: str | None = None
    admin_host: str | None = ADMIN_HOST_DEFAULT
    data_host: str | None = DATA_HOST_DEFAULT
    port: int = PORT_DEFAULT
    channel_count: int | None = None
    use_plaintext_negotiation: bool = False
    use_cached_data_pool: bool = False
    credential_options: CredentialOptions = field(default_factory=CredentialOptions.default_credentials)
    retry_options: RetryOptions = field(default_factory=RetryOptions)
    bulk_options: BulkOptions | None = None
    call_options: CallOptionsConfig = field(default_factory=CallOptionsConfig)
    channel_count_policy: Callable[[], int] = field(default=default_channel_count, repr=False, compare=False)

    @classmethod
    def from_existing(cls, config: ConnectionConfig) -> ConfigBuilder:
        """Builder pre-populated from ``config`` for copy-and-modify."""

        return cls(
            project_id=config.project_id,
            instance_id=config.instance_id,
            app_profile_id=config.app_profile_id,
            user_agent=config.user_agent,
            admin_host=config.admin_host,
            data_host=config.data_host,
            port=config.port,
            channel_count=config.channel_count,
            use_plaintext_negotiation=config.use_plaintext_negotiation,
            use_cached_data_pool=config.use_cached_data_pool,
            credential_options=config.credential_options,
            retry_options=config.retry_options,
            bulk_options=config.bulk_options,
            call_options=config.call_options,
        )

    def update(self, **changes: Any) -> ConfigBuilder:
        """Assign several fields at once; unknown names raise ``TypeError``."""

        known = {item.name for item in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise TypeError(f"Unknown configuration field(s): {', '.join(unknown)}")
        for name, value in changes.items():
            setattr(self, name, value)
        return self

    def enable_emulator(self, host_and_port: str) -> ConfigBuilder:
        """Point every endpoint at an emulator given as ``host:port``."""

        parts = host_and_port.split(":")
        if len(parts) != 2:
            raise ConfigError(
                ConfigErrorKind.MALFORMED_EMULATOR_ADDRESS,
                f"Malformed {EMULATOR_HOST_ENV_VAR} value: {host_and_port!r}. Expecting host:port.",
                value=host_and_port,
            )
        host, raw_port = parts
        # ASCII digits only; no sign, whitespace or underscores.
        if not (raw_port.isascii() and raw_port.isdigit()):
            raise ConfigError(
                ConfigErrorKind.MALFORMED_EMULATOR_ADDRESS,
                f"Invalid port in {EMULATOR_HOST_ENV_VAR} value: {host_and_port!r}",
                value=host_and_port,
            )
        port = int(raw_port)
        if port <= 0:
            raise ConfigError(
                ConfigErrorKind.MALFORMED_EMULATOR_ADDRESS,
                f"Port must be positive in {EMULATOR_HOST_ENV_VAR} value: {host_and_port!r}",
                value=host_and_port,
            )
        return self.enable_emulator_at(host, port)

    def enable_emulator_at(self, host: str, port: int) -> ConfigBuilder:
        """Use an unauthenticated plaintext emulator at ``host``:``port``."""

        if not host:
            raise ConfigError(ConfigErrorKind.INVALID_HOST, "Host cannot be empty", value=host)
        if port <= 0:
            raise ConfigError(ConfigErrorKind.INVALID_PORT, "Port must be positive", value=port)
        self.use_plaintext_negotiation = True
        self.credential_options = CredentialOptions.null_credential()
        self.admin_host = host
        self.data_host = host
        self.port = port
        LOG.info("Connecting to the emulator at %s:%s", host, port, extra={"host": host, "port": port})
        return self

    def resolve_environment_override(self, emulator_host: str | None) -> ConfigBuilder:
        """Apply an emulator address resolved at the process boundary, if any."""

        if emulator_host:
            self.enable_emulator(emulator_host)
        return self

    def build(self, *, emulator_host: str | None = None) -> ConnectionConfig:
        """Derive defaults, apply the emulator override, validate and freeze."""

        channel_count = self.channel_count if self.channel_count is not None else self.channel_count_policy()
        self.resolve_environment_override(emulator_host)
        if channel_count < 1:
            raise ConfigError(
                ConfigErrorKind.INVALID_CHANNEL_COUNT,
                "Channel count has to be at least 1.",
                value=channel_count,
            )
        config = ConnectionConfig(
            admin_host=self.admin_host or ADMIN_HOST_DEFAULT,
            data_host=self.data_host or DATA_HOST_DEFAULT,
            port=self.port,
            project_id=self.project_id,
            instance_id=self.instance_id,
            app_profile_id=self.app_profile_id if self.app_profile_id is not None else APP_PROFILE_DEFAULT,
            user_agent=self.user_agent,
            channel_count=channel_count,
            use_plaintext_negotiation=self.use_plaintext_negotiation,
            use_cached_data_pool=self.use_cached_data_pool,
            credential_options=self.credential_options,
            retry_options=self.retry_options,
            bulk_options=self.bulk_options,
            call_options=self.call_options,
        )
        LOG.debug(
            "Connection configuration built",
            extra={
                "project_id": config.project_id,
                "instance_id": config.instance_id,
                "data_host": config.data_host,
                "admin_host": config.admin_host,
            },
        )
        return config


__all__ = [
    "ADMIN_HOST_DEFAULT",
    "APP_PROFILE_DEFAULT",
    "ConfigBuilder",
    "ConnectionConfig",
    "DATA_HOST_DEFAULT",
    "InstanceName",
    "PORT_DEFAULT",
]
