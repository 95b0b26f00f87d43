"""specref -- In-memory OpenAPI 3.x documents with ``$ref`` resolution.

Load a document, then follow its internal references on demand::

    from specref import Document, Schema

    doc = Document.load("openapi.yaml")
    pet = Schema.from_ref(doc, "#/components/schemas/Pet")
    name = pet.properties["name"].resolve(doc)

Resolution failures are typed: a pointer into the wrong collection raises
:class:`~specref.exceptions.MismatchedTypeError`, a missing entry raises
:class:`~specref.exceptions.UnresolvableError`, and a looping chain of
references raises :class:`~specref.exceptions.ReferenceCycleError`.

Modules:
    models: Pydantic document models and the resolution contract.
    refs: Strict and loose ``$ref`` parsers.
    path: Location breadcrumbs used in diagnostics.
    resolver: Inline every reference below a schema.
    validation: Schema validation pass.
    loader: Read documents from files, URLs, or stdin.
    config: Settings with XDG paths and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer CLI entry point.
"""

__version__ = "0.1.0"

from specref.models import (  # noqa: E402
    Components,
    Document,
    Example,
    ExampleOrReference,
    ObjectOrReference,
    Reference,
    Schema,
    SchemaOrBool,
    SchemaOrBoolOrReference,
    SchemaOrReference,
    SchemaType,
)
from specref.path import LocationPath  # noqa: E402
from specref.refs import LooseRef, Ref, RefKind  # noqa: E402

__all__ = [
    "Components",
    "Document",
    "Example",
    "ExampleOrReference",
    "LocationPath",
    "LooseRef",
    "ObjectOrReference",
    "Ref",
    "RefKind",
    "Reference",
    "Schema",
    "SchemaOrBool",
    "SchemaOrBoolOrReference",
    "SchemaOrReference",
    "SchemaType",
]
