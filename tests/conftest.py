"""Shared test fixtures for specref.

Provides the petstore fixture document (raw and parsed), an isolated
configuration environment, and automatic reset of the global output state.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from specref.models import Document
from specref.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"
PETSTORE_PATH = FIXTURES_DIR / "petstore.yaml"


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches sys.stdout/sys.stderr at creation time; when
    CliRunner swaps those streams the cached references go stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    """Raw petstore document dict."""
    with open(PETSTORE_PATH, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def petstore(petstore_raw: dict[str, Any]) -> Document:
    """Parsed petstore document."""
    return Document.from_dict(petstore_raw)


@pytest.fixture
def pet_document() -> Document:
    """The minimal document of the resolution scenarios: ``Pet = {type: object}``."""
    return Document.from_dict(
        {
            "openapi": "3.1.0",
            "info": {"title": "Scenarios", "version": "1.0"},
            "components": {"schemas": {"Pet": {"type": "object"}}},
        }
    )


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME into tmp_path, clears SPECREF_* variables, and
    changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("specref.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for var in ["SPECREF_FORMAT", "SPECREF_SEPARATOR"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    yield output
    reset_output()
