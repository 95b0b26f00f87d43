"""Inline every ``$ref`` inside a schema tree.

:meth:`~specref.models.ObjectOrReference.resolve` follows one slot at a
time. Consumers such as code generators usually want the opposite: a schema
whose nested slots are all inline. :func:`inline_refs` builds that copy by
walking ``properties``, ``items``, ``additionalProperties`` and the
composition keywords, replacing every reference with the schema it points
to.

Recursive schemas (a tree node whose children are tree nodes) would never
finish, so the walk tracks the pointers already followed on the current
branch. A reference that would re-enter one of them is kept as a reference
at that point. The set is copied per branch so sibling slots pointing at
the same component both get inlined.

The input schema and the document are never modified.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specref.models import (
    Document,
    Schema,
    SchemaOrBool,
    SchemaOrBoolOrReference,
    SchemaOrReference,
)
from specref.refs import Ref, RefKind

logger = logging.getLogger(__name__)


def inline_refs(schema: Schema, document: Document) -> Schema:
    """Return a copy of *schema* with nested references replaced by their targets.

    Args:
        schema: The schema to expand.
        document: The document the references point into.

    Returns:
        A new :class:`~specref.models.Schema`. Slots that would close a
        reference cycle keep their ``$ref``.

    Raises:
        RefError: If a nested reference cannot be resolved.
    """
    return _inline_schema(schema, document, frozenset())


def inline_component(document: Document, name: str) -> Schema:
    """Resolve ``#/components/schemas/<name>`` and inline everything below it.

    The component's own pointer counts as already followed, so a schema that
    refers to itself keeps that reference at the first recursion.

    Raises:
        RefError: If the component or a nested reference cannot be resolved.
    """
    pointer = str(Ref(RefKind.SCHEMA, name))
    schema = Schema.from_ref(document, pointer)
    return _inline_schema(schema, document, frozenset({pointer}))


def _inline_schema(
    schema: Schema, document: Document, seen: frozenset[str]
) -> Schema:
    update: dict[str, Any] = {}
    if schema.properties:
        update["properties"] = {
            key: _inline_slot(slot, document, seen)
            for key, slot in schema.properties.items()
        }
    if schema.items is not None:
        update["items"] = _inline_slot(schema.items, document, seen)
    if schema.additional_properties is not None:
        update["additional_properties"] = _inline_additional(
            schema.additional_properties, document, seen
        )
    for field in ("all_of", "one_of", "any_of"):
        members = getattr(schema, field)
        if members:
            update[field] = [_inline_slot(m, document, seen) for m in members]
    return schema.model_copy(update=update)


def _inline_slot(
    slot: SchemaOrReference, document: Document, seen: frozenset[str]
) -> SchemaOrReference:
    target = _follow(slot.reference, document, seen)
    if target is not None:
        schema, seen = target
    elif slot.is_reference:
        return slot
    else:
        schema = slot.root
    return SchemaOrReference(_inline_schema(schema, document, seen))


def _inline_additional(
    slot: SchemaOrBoolOrReference, document: Document, seen: frozenset[str]
) -> SchemaOrBoolOrReference:
    target = _follow(slot.reference, document, seen)
    if target is not None:
        schema, seen = target
    elif slot.is_reference:
        return slot
    else:
        schema = slot.root.schema_
        if schema is None:
            return slot
    return SchemaOrBoolOrReference(
        SchemaOrBool(_inline_schema(schema, document, seen))
    )


def _follow(
    ref: Optional[str], document: Document, seen: frozenset[str]
) -> Optional[tuple[Schema, frozenset[str]]]:
    """Resolve *ref* unless it is absent or already on this branch."""
    if ref is None:
        return None
    if ref in seen:
        logger.debug("Leaving cyclic reference %s in place", ref)
        return None
    return Schema.from_ref(document, ref), seen | {ref}
