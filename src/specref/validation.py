"""Schema validation pass layered on top of resolution.

Resolution never raises :class:`~specref.exceptions.SchemaError`; this
module does. It implements one rule: a schema listing ``required``
properties must declare ``type: object``. A missing type raises
:class:`~specref.exceptions.NoTypeError` and any other type raises
:class:`~specref.exceptions.RequiredSpecifiedOnNonObjectError`.
:class:`~specref.exceptions.UnknownTypeError` is raised earlier, when a
document with an unrecognised ``type`` keyword is loaded.

:func:`validate_document` walks every component schema and collects a
:class:`SchemaIssue` per problem instead of stopping at the first one.
References are checked for resolvability but not descended into: every
internal target is itself a component and gets walked on its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Union

from specref.exceptions import (
    NoTypeError,
    RefError,
    RequiredSpecifiedOnNonObjectError,
    SchemaError,
)
from specref.models import (
    Document,
    ObjectOrReference,
    Schema,
    SchemaOrBool,
    SchemaType,
)
from specref.path import LocationPath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaIssue:
    """A problem found at *location* by :func:`validate_document`."""

    location: LocationPath = field(hash=False)
    error: Union[SchemaError, RefError]

    @property
    def message(self) -> str:
        return str(self.error)


def validate_schema(schema: Schema) -> None:
    """Check *schema* on its own, without looking at nested slots.

    Raises:
        NoTypeError: If ``required`` is set and no ``type`` is declared.
        RequiredSpecifiedOnNonObjectError: If ``required`` is set and the
            type is not ``object``.
    """
    if not schema.required:
        return
    if schema.schema_type is None:
        raise NoTypeError("Required fields specified on a schema with no type")
    if schema.schema_type is not SchemaType.OBJECT:
        raise RequiredSpecifiedOnNonObjectError(
            "Required fields specified on a non-object schema "
            f"(type: {schema.schema_type.value})"
        )


def validate_document(document: Document, separator: str = "/") -> list[SchemaIssue]:
    """Validate every schema under ``components.schemas``.

    Args:
        document: The document to check.
        separator: Separator used when rendering issue locations.

    Returns:
        Issues in walk order: components by name, then nested slots in the
        order of :meth:`~specref.models.Schema.children`. Empty when the
        document is clean.
    """
    issues: list[SchemaIssue] = []
    if document.components is None:
        return issues

    base = LocationPath(separator).extend("components").extend("schemas")
    for name in sorted(document.components.schemas):
        _walk(document.components.schemas[name], document, base.extend(name), issues)

    logger.debug("Validation found %d issue(s)", len(issues))
    return issues


def _walk(
    slot: ObjectOrReference,
    document: Document,
    location: LocationPath,
    issues: list[SchemaIssue],
) -> None:
    if slot.is_reference:
        try:
            slot.resolve(document)
        except RefError as exc:
            issues.append(SchemaIssue(location, exc))
        return

    value = slot.inline
    if isinstance(value, SchemaOrBool):
        value = value.schema_
    if not isinstance(value, Schema):
        return

    try:
        validate_schema(value)
    except SchemaError as exc:
        issues.append(SchemaIssue(location, exc))

    for segments, child in value.children():
        child_location = location
        for segment in segments:
            child_location = child_location.extend(segment)
        _walk(child, document, child_location, issues)
