"""Settings file loading helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import tomllib

from pydantic import BaseModel, ValidationError

from .config import ConfigBuilder, ConnectionConfig
from .options import BulkOptions, CallOptionsConfig, CredentialOptions, RetryOptions

LOG = logging.getLogger(__name__)

CONFIG_FILE = Path.home() / ".config" / "tablecompat" / "config.toml"

_STRING_KEYS = ("project_id", "instance_id", "app_profile_id", "user_agent", "admin_host", "data_host")
_INT_KEYS = ("port", "channel_count")
_BOOL_KEYS = ("use_plaintext_negotiation", "use_cached_data_pool")

_SECTIONS: dict[str, tuple[str, type[BaseModel]]] = {
    "credentials": ("credential_options", CredentialOptions),
    "retry": ("retry_options", RetryOptions),
    "bulk": ("bulk_options", BulkOptions),
    "call_options": ("call_options", CallOptionsConfig),
}


def load_settings(path: Path | None = None) -> ConfigBuilder:
    """Return a builder filled from the settings file; defaults if it is missing."""

    target = path or CONFIG_FILE
    try:
        data = _read_settings_file(target)
    except FileNotFoundError:
        return ConfigBuilder()
    except (tomllib.TOMLDecodeError, OSError):
        LOG.warning("Unreadable settings file; using defaults", extra={"path": str(target)})
        return ConfigBuilder()
    return ConfigBuilder().update(**data)


def save_settings(config: ConnectionConfig, path: Path | None = None) -> None:
    """Persist ``config`` so that :func:`load_settings` rebuilds an equal one."""

    target = path or CONFIG_FILE
    target.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json", exclude={"instance_name"})
    lines: list[str] = []
    for key in (*_STRING_KEYS, *_INT_KEYS, *_BOOL_KEYS):
        value = data.get(key)
        if value is not None:
            lines.append(f"{key} = {_toml_value(value)}")
    for section, (field_name, _) in _SECTIONS.items():
        values = data.get(field_name) or {}
        lines.append("")
        lines.append(f"[{section}]")
        for key, value in values.items():
            if value is not None:
                lines.append(f"{key} = {_toml_value(value)}")
    target.write_text("\n".join(lines) + "\n")


def _read_settings_file(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        raw = tomllib.load(handle)
    data: dict[str, object] = {}
    for key in _STRING_KEYS:
        value = raw.get(key)
        if isinstance(value, str):
            data[key] = value
    for key in _INT_KEYS:
        value = raw.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            data[key] = value
    for key in _BOOL_KEYS:
        value = raw.get(key)
        if isinstance(value, bool):
            data[key] = value
    for section, (field_name, model) in _SECTIONS.items():
        values = raw.get(section)
        if not isinstance(values, dict):
            continue
        known = {name: value for name, value in values.items() if name in model.model_fields}
        try:
            data[field_name] = model.model_validate(known)
        except ValidationError:
            LOG.warning("Ignoring invalid settings section", extra={"section": section})
    return data


def _toml_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_toml_value(item) for item in sorted(value)) + "]"
    return json.dumps(str(value))


__all__ = ["CONFIG_FILE", "load_settings", "save_settings"]
