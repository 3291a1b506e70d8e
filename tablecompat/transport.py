"""Transport contract for the remote table service, plus an in-memory stand-in."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Protocol, Sequence, runtime_checkable

from .adapters.compare import CompareOperator
from .adapters.schema import RemoteTableDescriptor


class TransportError(RuntimeError):
    """Raised when the transport rejects or fails a request."""


class MutationKind(str, Enum):
    SET_CELL = "set_cell"
    DELETE_CELLS = "delete_cells"
    DELETE_ROW = "delete_row"


@dataclass(frozen=True, slots=True)
class Mutation:
    """Single change applied to a row when a condition passes."""

    kind: MutationKind
    family: str | None = None
    qualifier: bytes | None = None
    value: bytes | None = None

    @classmethod
    def set_cell(cls, family: str, qualifier: bytes, value: bytes) -> Mutation:
        return cls(MutationKind.SET_CELL, family, qualifier, value)

    @classmethod
    def delete_cells(cls, family: str, qualifier: bytes) -> Mutation:
        return cls(MutationKind.DELETE_CELLS, family, qualifier)

    @classmethod
    def delete_row(cls) -> Mutation:
        return cls(MutationKind.DELETE_ROW)


@dataclass(frozen=True, slots=True)
class CheckAndMutateRequest:
    """Conditional mutation, already expressed with the remote operator.

    ``value`` of ``None`` checks that the cell does not exist.
    """

    table_name: str
    app_profile_id: str
    row_key: bytes
    family: str
    qualifier: bytes
    operator: CompareOperator
    value: bytes | None
    mutations: tuple[Mutation, ...]


@runtime_checkable
class TableTransport(Protocol):
    """Protocol implemented by transports to the remote service."""

    async def create_table(self, parent: str, table_id: str, table: RemoteTableDescriptor) -> str:
        """Create a table under ``parent`` and return its qualified name."""

    async def check_and_mutate(self, request: CheckAndMutateRequest) -> bool:
        """Apply the mutations when the condition holds; report whether it held."""


Row = dict[tuple[str, bytes], bytes]


class InMemoryTransport:
    """Transport that keeps tables and rows in process memory."""

    def __init__(self, rows: Mapping[str, Mapping[bytes, Mapping[tuple[str, bytes], bytes]]] | None = None) -> None:
        self.tables: dict[str, RemoteTableDescriptor] = {}
        self.requests: list[CheckAndMutateRequest] = []
        self._rows: dict[str, dict[bytes, Row]] = {
            table: {key: dict(cells) for key, cells in table_rows.items()}
            for table, table_rows in (rows or {}).items()
        }

    async def create_table(self, parent: str, table_id: str, table: RemoteTableDescriptor) -> str:
        name = f"{parent}/tables/{table_id}"
        if name in self.tables:
            raise TransportError(f"Table '{name}' already exists")
        self.tables[name] = table
        self._rows.setdefault(name, {})
        return name

    async def check_and_mutate(self, request: CheckAndMutateRequest) -> bool:
        self.requests.append(request)
        rows = self._rows.setdefault(request.table_name, {})
        row = rows.get(request.row_key, {})
        current = row.get((request.family, request.qualifier))
        passed = _condition_holds(request.operator, request.value, current)
        if passed:
            self._apply(rows, request.row_key, request.mutations)
        return passed

    def read_row(self, table_name: str, row_key: bytes) -> Row:
        """Current cells of a row (testing helper)."""

        return dict(self._rows.get(table_name, {}).get(row_key, {}))

    @staticmethod
    def _apply(rows: dict[bytes, Row], row_key: bytes, mutations: Sequence[Mutation]) -> None:
        row = rows.setdefault(row_key, {})
        for mutation in mutations:
            if mutation.kind is MutationKind.DELETE_ROW:
                row.clear()
            elif mutation.kind is MutationKind.DELETE_CELLS:
                row.pop((mutation.family, mutation.qualifier), None)
            else:
                row[(mutation.family, mutation.qualifier)] = mutation.value or b""
        if not row:
            rows.pop(row_key, None)


def _condition_holds(operator: CompareOperator, expected: bytes | None, current: bytes | None) -> bool:
    # The supplied value is the left operand, the stored cell the right one.
    if operator is CompareOperator.NO_OP:
        return False
    if expected is None:
        return current is None
    if current is None:
        return False
    if operator is CompareOperator.EQUAL:
        return expected == current
    if operator is CompareOperator.NOT_EQUAL:
        return expected != current
    if operator is CompareOperator.LESS:
        return expected < current
    if operator is CompareOperator.LESS_OR_EQUAL:
        return expected <= current
    if operator is CompareOperator.GREATER:
        return expected > current
    if operator is CompareOperator.GREATER_OR_EQUAL:
        return expected >= current
    raise TransportError(f"Unsupported operator: {operator!r}")


__all__ = [
    "CheckAndMutateRequest",
    "InMemoryTransport",
    "Mutation",
    "MutationKind",
    "TableTransport",
    "TransportError",
]
