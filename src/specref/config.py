"""Configuration loading with XDG paths and precedence resolution.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.specref/`` on macOS and Windows. See :func:`get_config_dir`.
* **User config** -- ``<config_dir>/config.json``, deserialised into
  :class:`~specref.models.Settings`.
* **Project config** -- ``./specref.json``; any subset of the same keys.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project config, and user config.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from specref.exceptions import ConfigError
from specref.models import Settings

_APP_NAME = "specref"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "specref.json"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory (not created if missing).

    On Linux/BSD: ``$XDG_CONFIG_HOME/specref/`` (default ``~/.config/specref/``).
    On macOS/Windows: ``~/.specref/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        return base / _APP_NAME
    return Path.home() / f".{_APP_NAME}"


# --- Config files ---


def _read_json(path: Path, label: str) -> Optional[dict[str, Any]]:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid {label} config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} config at {path}: expected a JSON object")
    return data


def load_user_config() -> Optional[dict[str, Any]]:
    """Load ``<config_dir>/config.json``, or ``None`` if it does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    return _read_json(get_config_dir() / _CONFIG_FILENAME, "user")


def load_project_config() -> Optional[dict[str, Any]]:
    """Load ``./specref.json``, or ``None`` if it does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    return _read_json(Path.cwd() / _PROJECT_CONFIG_FILENAME, "project")


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# --- Precedence resolution ---


def resolve_config(
    cli_format: Optional[str] = None,
    cli_separator: Optional[str] = None,
) -> Settings:
    """Resolve settings with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_format``, ``cli_separator``)
        2. Environment variables (``SPECREF_FORMAT``, ``SPECREF_SEPARATOR``)
        3. Project config (``./specref.json``)
        4. User config (``~/.config/specref/config.json``)
        5. Defaults

    Raises:
        ConfigError: If a config file is malformed or the merged values fail
            validation.
    """
    data: dict[str, Any] = {}
    for layer in (load_user_config(), load_project_config()):
        if layer is not None:
            data = _merge(data, layer)

    env_format = os.environ.get("SPECREF_FORMAT")
    env_separator = os.environ.get("SPECREF_SEPARATOR")
    overrides: dict[str, Any] = {}
    if env_separator:
        overrides["separator"] = env_separator
    if env_format:
        overrides["output"] = {"format": env_format}
    if cli_separator is not None:
        overrides["separator"] = cli_separator
    if cli_format is not None:
        overrides["output"] = {"format": cli_format}
    data = _merge(data, overrides)

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
