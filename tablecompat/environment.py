"""Process-boundary helpers: environment lookups and runtime-derived defaults."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Callable, Mapping

if TYPE_CHECKING:
    from .config import ConfigBuilder, ConnectionConfig

EMULATOR_HOST_ENV_VAR = "BIGTABLE_EMULATOR_HOST"

MAX_DEFAULT_CHANNEL_COUNT = 250
CHANNELS_PER_CPU = 4


def default_channel_count(cpu_count: Callable[[], int | None] = os.cpu_count) -> int:
    """Channel count used when none is configured: four per CPU, capped at 250."""

    cpus = cpu_count() or 1
    return min(MAX_DEFAULT_CHANNEL_COUNT, max(1, cpus * CHANNELS_PER_CPU))


def emulator_host_from_env(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the emulator ``host:port`` from the environment, if set."""

    env = os.environ if environ is None else environ
    value = env.get(EMULATOR_HOST_ENV_VAR)
    return value or None


def build_from_environment(
    builder: "ConfigBuilder",
    environ: Mapping[str, str] | None = None,
) -> "ConnectionConfig":
    """Build ``builder`` with the emulator override read from the environment."""

    return builder.build(emulator_host=emulator_host_from_env(environ))


__all__ = [
    "EMULATOR_HOST_ENV_VAR",
    "build_from_environment",
    "default_channel_count",
    "emulator_host_from_env",
]
