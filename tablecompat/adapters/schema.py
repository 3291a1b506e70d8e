"""Translation between legacy table descriptors and remote table descriptors."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

LOG = logging.getLogger(__name__)

VERSIONS_KEY = b"VERSIONS"
TTL_KEY = b"TTL"
# Legacy marker for "never expire".
TTL_FOREVER = 2_147_483_647


def _frozen_config(values: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType({str(key): str(value) for key, value in values.items()})


_BYTES_TYPES = (bytes, bytearray, memoryview)


def _frozen_bytes(values: Mapping[bytes, bytes]) -> Mapping[bytes, bytes]:
    frozen: dict[bytes, bytes] = {}
    for key, value in values.items():
        if not isinstance(key, _BYTES_TYPES) or not isinstance(value, _BYTES_TYPES):
            raise TypeError(f"Metadata keys and values must be bytes, got {key!r}: {value!r}")
        frozen[bytes(key)] = bytes(value)
    return MappingProxyType(frozen)


@dataclass(frozen=True, slots=True)
class ColumnFamilySpec:
    """Legacy column family descriptor: settings plus raw metadata values."""

    name: str
    configuration: Mapping[str, str] = field(default_factory=dict)
    values: Mapping[bytes, bytes] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "configuration", _frozen_config(self.configuration))
        object.__setattr__(self, "values", _frozen_bytes(self.values))


@dataclass(frozen=True, slots=True)
class TableSpec:
    """Legacy table descriptor."""

    name: str
    column_families: tuple[ColumnFamilySpec, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "column_families", tuple(self.column_families))


@dataclass(frozen=True, slots=True)
class GcRule:
    """Garbage collection policy for a remote column family.

    Both limits set means a cell is collected once either one applies.
    """

    max_num_versions: int | None = None
    max_age_seconds: int | None = None

    @property
    def is_empty(self) -> bool:
        return self.max_num_versions is None and self.max_age_seconds is None

    def collects(self, version_index: int, age_seconds: int) -> bool:
        """Whether a cell is collected.

        ``version_index`` is 0 for the newest version of the cell.
        """

        if self.max_num_versions is not None and version_index >= self.max_num_versions:
            return True
        return self.max_age_seconds is not None and age_seconds > self.max_age_seconds


@dataclass(frozen=True, slots=True)
class RemoteColumnFamily:
    """Remote column family message."""

    configuration: Mapping[str, str] = field(default_factory=dict)
    values: Mapping[bytes, bytes] = field(default_factory=dict)
    gc_rule: GcRule = field(default_factory=GcRule)

    def __post_init__(self) -> None:
        object.__setattr__(self, "configuration", _frozen_config(self.configuration))
        object.__setattr__(self, "values", _frozen_bytes(self.values))


@dataclass(frozen=True, slots=True)
class RemoteTableDescriptor:
    """Remote table message: column families keyed by name."""

    column_families: Mapping[str, RemoteColumnFamily] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "column_families", MappingProxyType(dict(self.column_families)))


class SchemaAdapter:
    """Stateless translator from legacy table descriptors to remote ones."""

    def adapt(self, table: TableSpec) -> RemoteTableDescriptor:
        """Translate ``table``; a repeated family name overwrites the earlier one."""

        families: dict[str, RemoteColumnFamily] = {}
        for family in table.column_families:
            if family.name in families:
                # Kept as last-write-wins; a conflict error may replace this.
                LOG.warning(
                    "Duplicate column family; keeping the last definition",
                    extra={"table": table.name, "family": family.name},
                )
            families[family.name] = self.adapt_family(family)
        return RemoteTableDescriptor(column_families=families)

    def adapt_family(self, family: ColumnFamilySpec) -> RemoteColumnFamily:
        """Copy settings and metadata byte-for-byte and derive the GC rule."""

        return RemoteColumnFamily(
            configuration=dict(family.configuration),
            values=dict(family.values),
            gc_rule=_gc_rule_for(family),
        )

    def to_table_spec(self, name: str, descriptor: RemoteTableDescriptor) -> TableSpec:
        """Rebuild a legacy descriptor; families come back ordered by name."""

        return TableSpec(
            name=name,
            column_families=tuple(
                ColumnFamilySpec(
                    name=family_name,
                    configuration=dict(family.configuration),
                    values=dict(family.values),
                )
                for family_name, family in sorted(descriptor.column_families.items())
            ),
        )

    def adapt_all(self, tables: Iterable[TableSpec]) -> dict[str, RemoteTableDescriptor]:
        return {table.name: self.adapt(table) for table in tables}


def _gc_rule_for(family: ColumnFamilySpec) -> GcRule:
    versions = _int_value(family, VERSIONS_KEY)
    ttl = _int_value(family, TTL_KEY)
    if ttl is not None and ttl >= TTL_FOREVER:
        ttl = None
    return GcRule(
        max_num_versions=versions if versions is not None and versions > 0 else None,
        max_age_seconds=ttl if ttl is not None and ttl > 0 else None,
    )


def _int_value(family: ColumnFamilySpec, key: bytes) -> int | None:
    raw = family.values.get(key)
    if raw is None:
        return None
    try:
        return int(raw.decode("ascii"))
    except (UnicodeDecodeError, ValueError):
        LOG.debug(
            "Ignoring non-numeric column family value",
            extra={"family": family.name, "key": key.decode("ascii", "replace")},
        )
        return None


__all__ = [
    "ColumnFamilySpec",
    "GcRule",
    "RemoteColumnFamily",
    "RemoteTableDescriptor",
    "SchemaAdapter",
    "TableSpec",
]
