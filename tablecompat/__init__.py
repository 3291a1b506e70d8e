"""Legacy tabular-store compatibility layer: configuration and schema translation."""

from __future__ import annotations

__version__ = "0.1.0"

from .adapters import (
    ColumnFamilySpec,
    CompareOp,
    CompareOperator,
    GcRule,
    RemoteColumnFamily,
    RemoteTableDescriptor,
    SchemaAdapter,
    TableSpec,
    translate,
    translate_back,
)
from .config import ConfigBuilder, ConnectionConfig, InstanceName
from .errors import ConfigError, ConfigErrorKind
from .options import BulkOptions, CallOptionsConfig, CredentialOptions, CredentialType, RetryOptions

__all__ = [
    "BulkOptions",
    "CallOptionsConfig",
    "ColumnFamilySpec",
    "CompareOp",
    "CompareOperator",
    "ConfigBuilder",
    "ConfigError",
    "ConfigErrorKind",
    "ConnectionConfig",
    "CredentialOptions",
    "CredentialType",
    "GcRule",
    "InstanceName",
    "RemoteColumnFamily",
    "RemoteTableDescriptor",
    "RetryOptions",
    "SchemaAdapter",
    "TableSpec",
    "__version__",
    "translate",
    "translate_back",
]
