"""Schema administration entry point for legacy table descriptors."""

from __future__ import annotations

import logging

from .adapters.schema import SchemaAdapter, TableSpec
from .config import ConnectionConfig, InstanceName
from .errors import ConfigError, ConfigErrorKind
from .transport import TableTransport

LOG = logging.getLogger(__name__)


def require_instance_name(config: ConnectionConfig) -> InstanceName:
    """Return the configured instance name or fail fast."""

    if config.instance_name is None:
        raise ConfigError(
            ConfigErrorKind.MISSING_INSTANCE_NAME,
            "Both a project id and an instance id are required for this call.",
        )
    return config.instance_name


class TableAdmin:
    """Creates tables described with the legacy descriptor types."""

    def __init__(
        self,
        config: ConnectionConfig,
        transport: TableTransport,
        *,
        schema_adapter: SchemaAdapter | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._schema_adapter = schema_adapter or SchemaAdapter()

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    async def create_table(self, table: TableSpec) -> str:
        """Translate ``table`` and create it; returns the qualified table name."""

        instance_name = require_instance_name(self._config)
        descriptor = self._schema_adapter.adapt(table)
        LOG.debug(
            "Creating table",
            extra={"table": table.name, "families": sorted(descriptor.column_families)},
        )
        return await self._transport.create_table(str(instance_name), table.name, descriptor)


__all__ = ["TableAdmin", "require_instance_name"]
