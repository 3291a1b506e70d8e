"""Adapters between the legacy client data model and the remote service."""

from .compare import CompareOp, CompareOperator, translate, translate_back
from .schema import (
    ColumnFamilySpec,
    GcRule,
    RemoteColumnFamily,
    RemoteTableDescriptor,
    SchemaAdapter,
    TableSpec,
)

__all__ = [
    "ColumnFamilySpec",
    "CompareOp",
    "CompareOperator",
    "GcRule",
    "RemoteColumnFamily",
    "RemoteTableDescriptor",
    "SchemaAdapter",
    "TableSpec",
    "translate",
    "translate_back",
]
