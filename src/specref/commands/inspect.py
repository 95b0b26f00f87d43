"""Inspect commands -- examine the schemas of a document.

``specref schemas`` lists ``components.schemas``; ``specref validate`` runs
the validation pass from :mod:`specref.validation` and exits with
:data:`~specref.exit_codes.EXIT_SCHEMA_ERROR` when it finds problems.
"""

from __future__ import annotations

import typer

from specref.commands._common import get_settings, load_document
from specref.exit_codes import EXIT_SCHEMA_ERROR
from specref.models import Schema
from specref.output import info, print_table, success
from specref.validation import validate_document


def schemas_command(
    spec: str = typer.Argument(..., help="Document path, URL, or '-' for stdin."),
) -> None:
    """List all component schemas.

    Shows each schema's type and up to five property names. Entries that
    are themselves references show their target instead.

    Example::

        specref schemas openapi.yaml
    """
    document = load_document(spec)
    schemas = document.components.schemas if document.components else {}
    if not schemas:
        info("No schemas defined in this document.")
        return

    headers = ["Schema", "Type", "Properties"]
    rows: list[list[str]] = []
    for name, slot in sorted(schemas.items()):
        if slot.is_reference:
            rows.append([name, f"-> {slot.reference}", ""])
            continue
        schema: Schema = slot.root
        schema_type = schema.schema_type.value if schema.schema_type else "-"
        prop_names = sorted(schema.properties)
        props = ", ".join(prop_names[:5])
        if len(prop_names) > 5:
            props += "..."
        rows.append([name, schema_type, props])

    print_table(headers, rows, title=f"Schemas ({len(rows)})")


def validate_command(
    ctx: typer.Context,
    spec: str = typer.Argument(..., help="Document path, URL, or '-' for stdin."),
) -> None:
    """Validate every component schema and report problems.

    Checks that each reference resolves and that schemas listing
    ``required`` properties declare ``type: object``.

    Example::

        specref validate openapi.yaml
    """
    settings = get_settings(ctx)
    document = load_document(spec)
    issues = validate_document(document, separator=settings.separator)

    if not issues:
        success("No issues found.")
        return

    headers = ["Location", "Error", "Message"]
    rows = [
        [str(issue.location), type(issue.error).__name__, issue.message]
        for issue in issues
    ]
    print_table(headers, rows, title=f"Issues ({len(rows)})")
    raise typer.Exit(code=EXIT_SCHEMA_ERROR)
