"""Resolve commands -- follow ``$ref`` pointers in a document.

``specref resolve`` prints the entity a single pointer denotes;
``specref inline`` prints a component schema with every nested reference
replaced by its target.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

import typer

from specref.commands._common import fail, load_document
from specref.exceptions import InvalidUsageError, SpecrefError
from specref.models import Example, FromRef, Schema
from specref.output import print_document
from specref.refs import Ref, RefKind
from specref.resolver import inline_component


class EntityKind(str, Enum):
    """Entity types the ``resolve`` command can target."""

    SCHEMA = "schema"
    EXAMPLE = "example"


_RESOLVERS: dict[EntityKind, type[FromRef]] = {
    EntityKind.SCHEMA: Schema,
    EntityKind.EXAMPLE: Example,
}

_KIND_FOR_REF: dict[RefKind, EntityKind] = {
    RefKind.SCHEMA: EntityKind.SCHEMA,
    RefKind.EXAMPLE: EntityKind.EXAMPLE,
}


def resolve_command(
    spec: str = typer.Argument(..., help="Document path, URL, or '-' for stdin."),
    ref: str = typer.Argument(..., help="Pointer, e.g. '#/components/schemas/Pet'."),
    kind: Optional[EntityKind] = typer.Option(
        None,
        "--kind",
        "-k",
        help="Entity type to resolve as. Defaults to the pointer's own kind.",
    ),
) -> None:
    """Resolve a ``$ref`` pointer and print the entity it denotes.

    Passing ``--kind`` resolves through that entity type's contract, so a
    pointer into another collection fails with a type mismatch.

    Example::

        specref resolve openapi.yaml '#/components/schemas/Pet'
        specref resolve openapi.yaml '#/components/examples/Cat' --kind example
    """
    document = load_document(spec)
    try:
        if kind is None:
            parsed = Ref.parse(ref)
            kind = _KIND_FOR_REF.get(parsed.kind)
            if kind is None:
                raise InvalidUsageError(
                    f"Resolving '{parsed.kind.value}' components is not supported: {ref}"
                )
        entity = _RESOLVERS[kind].from_ref(document, ref)
    except SpecrefError as exc:
        fail(exc)

    print_document(entity.to_dict())


def inline_command(
    spec: str = typer.Argument(..., help="Document path, URL, or '-' for stdin."),
    name: str = typer.Argument(..., help="Name under components.schemas."),
) -> None:
    """Print a component schema with all nested references inlined.

    References that would recurse into a schema already being expanded are
    kept as ``$ref`` pointers.

    Example::

        specref inline openapi.yaml TreeNode
    """
    document = load_document(spec)
    try:
        schema = inline_component(document, name)
    except SpecrefError as exc:
        fail(exc)

    print_document(schema.to_dict())
