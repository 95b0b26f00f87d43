"""Tests for specref.config -- XDG paths and precedence resolution."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from specref.config import (
    get_config_dir,
    load_project_config,
    load_user_config,
    resolve_config,
)
from specref.exceptions import ConfigError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write *data* as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _user_config_path(root: Path) -> Path:
    return root / "config" / "specref" / "config.json"


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestConfigDir:
    """Config directory on XDG and non-XDG platforms."""

    def test_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("specref.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".config" / "specref"

    def test_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("specref.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "custom"))

        assert get_config_dir() == tmp_path / "custom" / "specref"

    def test_non_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("specref.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".specref"

    def test_not_created(self, isolated_config: Path) -> None:
        assert not get_config_dir().exists()


# ---------------------------------------------------------------------------
# Config files
# ---------------------------------------------------------------------------


class TestConfigFiles:
    """Loading the user and project config files."""

    def test_missing_files(self, isolated_config: Path) -> None:
        assert load_user_config() is None
        assert load_project_config() is None

    def test_user_config(self, isolated_config: Path) -> None:
        _write_json(_user_config_path(isolated_config), {"separator": "."})
        assert load_user_config() == {"separator": "."}

    def test_project_config(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "specref.json", {"output": {"format": "json"}})
        assert load_project_config() == {"output": {"format": "json"}}

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        (isolated_config / "specref.json").write_text("{oops", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_non_object_raises(self, isolated_config: Path) -> None:
        _write_json(_user_config_path(isolated_config), ["a"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_user_config()


# ---------------------------------------------------------------------------
# Precedence resolution
# ---------------------------------------------------------------------------


class TestResolveConfig:
    """CLI > env > project > user > defaults."""

    def test_defaults(self, isolated_config: Path) -> None:
        settings = resolve_config()
        assert settings.separator == "/"
        assert settings.output.format == "auto"

    def test_user_over_defaults(self, isolated_config: Path) -> None:
        _write_json(_user_config_path(isolated_config), {"separator": ":"})
        assert resolve_config().separator == ":"

    def test_project_over_user(self, isolated_config: Path) -> None:
        _write_json(
            _user_config_path(isolated_config),
            {"separator": ":", "output": {"format": "plain"}},
        )
        _write_json(isolated_config / "specref.json", {"separator": "."})

        settings = resolve_config()
        assert settings.separator == "."
        assert settings.output.format == "plain"

    def test_env_over_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(isolated_config / "specref.json", {"separator": "."})
        monkeypatch.setenv("SPECREF_SEPARATOR", "|")
        monkeypatch.setenv("SPECREF_FORMAT", "json")

        settings = resolve_config()
        assert settings.separator == "|"
        assert settings.output.format == "json"

    def test_cli_over_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SPECREF_SEPARATOR", "|")
        monkeypatch.setenv("SPECREF_FORMAT", "json")

        settings = resolve_config(cli_format="plain", cli_separator=".")
        assert settings.separator == "."
        assert settings.output.format == "plain"

    def test_invalid_separator_raises(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config(cli_separator="::")
