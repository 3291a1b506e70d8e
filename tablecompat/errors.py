"""Configuration and translation failures."""

from __future__ import annotations

from enum import Enum


class ConfigErrorKind(str, Enum):
    """Categories of configuration/translation failures."""

    MALFORMED_EMULATOR_ADDRESS = "malformed_emulator_address"
    INVALID_HOST = "invalid_host"
    INVALID_PORT = "invalid_port"
    INVALID_CHANNEL_COUNT = "invalid_channel_count"
    UNMAPPED_OPERATOR = "unmapped_operator"
    MISSING_INSTANCE_NAME = "missing_instance_name"


class ConfigError(ValueError):
    """Raised when a configuration value or operator cannot be accepted.

    These indicate programmer or configuration mistakes and are never retried.
    """

    def __init__(self, kind: ConfigErrorKind, message: str, *, value: object = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.value = value


__all__ = ["ConfigError", "ConfigErrorKind"]
