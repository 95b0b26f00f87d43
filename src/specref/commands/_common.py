"""Helpers shared by the built-in commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from specref.exceptions import SpecrefError
from specref.models import Document, Settings
from specref.output import debug, error


def load_document(source: str) -> Document:
    """Load *source*, turning any :class:`SpecrefError` into a clean exit."""
    debug(f"Loading document from {source}")
    try:
        return Document.load(source)
    except SpecrefError as exc:
        fail(exc)


def get_settings(ctx: typer.Context) -> Settings:
    """Return the settings resolved by the root callback (defaults if absent)."""
    obj = ctx.obj or {}
    return obj.get("settings") or Settings()


def fail(exc: SpecrefError) -> NoReturn:
    """Report *exc* on stderr and exit with its exit code."""
    error(str(exc))
    raise typer.Exit(code=exc.exit_code)
