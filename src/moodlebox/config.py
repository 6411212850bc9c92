"""Runtime settings: where to look and how to run external commands.

Settings come from three layers, later ones winning:

1. Built-in defaults (the stock Raspberry Pi OS paths).
2. An optional YAML file, given explicitly or via ``MOODLEBOX_CONFIG``.
3. ``MOODLEBOX_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from moodlebox.exceptions import ConfigurationError

CONFIG_ENV_VAR = "MOODLEBOX_CONFIG"

# env var -> settings field
_ENV_OVERRIDES: dict[str, str] = {
    "MOODLEBOX_CPUINFO": "cpuinfo_path",
    "MOODLEBOX_NET_PATH": "net_class_path",
    "MOODLEBOX_SD_DEVICE": "sd_device",
    "MOODLEBOX_USE_SUDO": "use_sudo",
    "MOODLEBOX_COMMAND_TIMEOUT": "command_timeout",
}

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable runtime settings."""

    cpuinfo_path: Path = Path("/proc/cpuinfo")
    """File holding the ``Revision`` line."""

    net_class_path: Path = Path("/sys/class/net")
    """Directory scanned for wireless interfaces."""

    sd_device: str = "/dev/mmcblk0"
    """Block device inspected for unallocated space."""

    use_sudo: bool = True
    """Prefix privileged commands (``vcgencmd``, ``parted``) with ``sudo``."""

    command_timeout: float = 10.0
    """Seconds before an external command is abandoned."""


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw YAML/env value to the type of field *name*."""
    try:
        if name in ("cpuinfo_path", "net_class_path"):
            return Path(str(value))
        if name == "sd_device":
            return str(value)
        if name == "use_sudo":
            if isinstance(value, bool):
                return value
            word = str(value).strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
            raise ValueError(f"not a boolean: {value!r}")
        if name == "command_timeout":
            timeout = float(value)
            if timeout <= 0:
                raise ValueError("must be positive")
            return timeout
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid value for '{name}': {exc}") from exc
    raise ConfigurationError(f"Unknown setting '{name}'.")


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigurationError(
            f"Settings file not found: {path}",
            hint=f"Check --config or the {CONFIG_ENV_VAR} environment variable.",
        )
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot read settings file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping.")
    return data


def load_settings(path: str | os.PathLike[str] | None = None) -> Settings:
    """Build :class:`Settings` from defaults, an optional YAML file and env.

    Raises
    ------
    ConfigurationError
        When the file is missing or malformed, or a key or value is
        invalid.
    """
    known = {f.name for f in fields(Settings)}
    overrides: dict[str, Any] = {}

    cfg_path = path or os.getenv(CONFIG_ENV_VAR)
    if cfg_path:
        for key, value in _read_yaml(Path(cfg_path)).items():
            if key not in known:
                raise ConfigurationError(
                    f"Unknown setting '{key}'.",
                    hint="Valid settings: " + ", ".join(sorted(known)),
                )
            overrides[key] = _coerce(key, value)

    for env_name, field_name in _ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw:
            overrides[field_name] = _coerce(field_name, raw)

    return replace(Settings(), **overrides)
