"""Conditional mutations issued with legacy comparison operators."""

from __future__ import annotations

from typing import Iterable

from .adapters.compare import CompareOp, translate
from .admin import require_instance_name
from .config import ConnectionConfig
from .transport import CheckAndMutateRequest, Mutation, TableTransport


class Table:
    """Data-plane handle for one table."""

    def __init__(self, config: ConnectionConfig, transport: TableTransport, table_id: str) -> None:
        self._config = config
        self._transport = transport
        self._table_name = require_instance_name(config).table_name(table_id)

    @property
    def name(self) -> str:
        return self._table_name

    async def check_and_mutate(
        self,
        row: bytes,
        family: str,
        qualifier: bytes,
        op: CompareOp,
        value: bytes | None,
        mutations: Iterable[Mutation],
    ) -> bool:
        """Apply ``mutations`` to ``row`` if ``value`` compares to the stored cell by ``op``."""

        request = CheckAndMutateRequest(
            table_name=self._table_name,
            app_profile_id=self._config.app_profile_id,
            row_key=row,
            family=family,
            qualifier=qualifier,
            operator=translate(op),
            value=value,
            mutations=tuple(mutations),
        )
        return await self._transport.check_and_mutate(request)

    async def check_and_put(
        self,
        row: bytes,
        family: str,
        qualifier: bytes,
        value: bytes | None,
        put: Iterable[Mutation],
        *,
        op: CompareOp = CompareOp.EQUAL,
    ) -> bool:
        return await self.check_and_mutate(row, family, qualifier, op, value, put)

    async def check_and_delete(
        self,
        row: bytes,
        family: str,
        qualifier: bytes,
        value: bytes | None,
        *,
        op: CompareOp = CompareOp.EQUAL,
        delete: Iterable[Mutation] | None = None,
    ) -> bool:
        """Delete the row (or the given cells) when the condition holds."""

        mutations = tuple(delete) if delete is not None else (Mutation.delete_row(),)
        return await self.check_and_mutate(row, family, qualifier, op, value, mutations)


__all__ = ["Table"]
