"""Pydantic models for an OpenAPI document and its ``$ref`` resolution.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Containers** -- :class:`Reference` plus the object-or-reference root
models (:class:`SchemaOrReference`, :class:`ExampleOrReference`,
:class:`SchemaOrBoolOrReference`). Each holds exactly one of an inline
value or a ``$ref`` pointer and exposes :meth:`ObjectOrReference.resolve`.

**Entities** -- :class:`Schema`, :class:`SchemaOrBool` and
:class:`Example`. Each implements the :class:`FromRef` contract: given the
owning document and a raw pointer, return the concrete entity or raise a
typed :class:`~specref.exceptions.RefError`.

**Document** -- :class:`Components` and :class:`Document`, the read-only
collaborator that resolution queries through ``lookup(kind, name)``.

Nested schema slots are never resolved on load. A caller holding the
document resolves each slot explicitly, when needed::

    doc = Document.load("petstore.yaml")
    pet = Schema.from_ref(doc, "#/components/schemas/Pet")
    name = pet.properties["name"].resolve(doc)

When a stored component is itself a reference, resolution keeps following
the chain and raises :class:`~specref.exceptions.ReferenceCycleError` if a
pointer comes round again.

All models serialise with their OpenAPI field names (``by_alias=True``) and
omit optional fields that are unset and collection fields that are empty,
so an inline schema survives a dump/validate round trip unchanged.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, ClassVar, Iterator, Optional, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    SerializerFunctionWrapHandler,
    StrictBool,
    StrictFloat,
    StrictInt,
    ValidationError,
    field_validator,
    model_serializer,
)

from specref.exceptions import (
    MismatchedTypeError,
    RefParseError,
    ReferenceCycleError,
    SpecParseError,
    UnknownTypeError,
    UnresolvableError,
)
from specref.refs import LooseRef, Ref, RefKind

logger = logging.getLogger(__name__)

_T = TypeVar("_T", bound="FromRef")


# --- Base ---


class SpecObject(BaseModel):
    """Base for every document model.

    Accepts both the OpenAPI field names and the Python attribute names on
    input, and drops absent values on output: ``None`` for optional fields
    and empty containers for fields that default to one.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None or (field.default_factory is not None and not value):
                data.pop(name, None)
                if field.alias:
                    data.pop(field.alias, None)
        return data

    def to_dict(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict using OpenAPI field names."""
        return self.model_dump(mode="json", by_alias=True)


class Reference(SpecObject):
    """A ``{"$ref": ...}`` object standing in for an inline value.

    ``summary`` and ``description`` are the OpenAPI 3.1 overrides allowed
    next to ``$ref``; they are carried through but never applied.
    """

    model_config = ConfigDict(populate_by_name=False)

    ref: str = Field(alias="$ref")
    summary: Optional[str] = None
    description: Optional[str] = None


# --- Resolution contract ---


class FromRef:
    """Resolution contract implemented by every entity type.

    Subclasses set ``ref_kind`` to the one collection they own.
    :meth:`from_ref` uses the strict parser and distinguishes every failure;
    :meth:`find_ref` uses the loose parser and reports any miss as ``None``.
    """

    ref_kind: ClassVar[RefKind]

    @classmethod
    def from_ref(cls: type[_T], document: Document, path: str) -> _T:
        """Resolve *path* against *document*.

        Args:
            document: The document owning the component collections.
            path: A raw pointer such as ``"#/components/schemas/Pet"``.

        Returns:
            The referenced entity. If the stored entry is itself a
            reference, the chain is followed until an inline value is found.

        Raises:
            RefParseError: If *path* is not a well-formed internal pointer.
            MismatchedTypeError: If *path* names another collection.
            UnresolvableError: If the collection has no entry named in *path*.
            ReferenceCycleError: If the chain of references loops.
        """
        return cls._from_ref(document, path, ())

    @classmethod
    def _from_ref(
        cls: type[_T], document: Document, path: str, seen: tuple[str, ...]
    ) -> _T:
        if path in seen:
            raise ReferenceCycleError(seen + (path,))

        ref = Ref.parse(path)
        if ref.kind is not cls.ref_kind:
            raise MismatchedTypeError(ref.kind, cls.ref_kind)

        entry = document.lookup(ref.kind, ref.name)
        if entry is None:
            logger.debug("No %s named '%s' for %s", ref.kind.value, ref.name, path)
            raise UnresolvableError(path)

        logger.debug("Resolved %s (hop %d)", path, len(seen) + 1)
        return entry._resolve(document, seen + (path,))

    @classmethod
    def find_ref(cls: type[_T], document: Document, path: str) -> Optional[_T]:
        """Resolve *path*, returning ``None`` when it is not this type's to resolve.

        A pointer that is malformed, names another collection, or names a
        missing entry all yield ``None``, so several entity types can be
        tried in turn for the same pointer. Reference cycles still raise.
        """
        loose = LooseRef.parse(path)
        if loose is None or loose.kind != cls.ref_kind.value:
            return None
        try:
            return cls.from_ref(document, path)
        except (RefParseError, MismatchedTypeError, UnresolvableError) as exc:
            logger.debug("find_ref(%s) on %s: %s", path, cls.__name__, exc)
            return None


# --- Object-or-reference containers ---


class ObjectOrReference(RootModel[Any]):
    """Either an inline value or a :class:`Reference` to one, never both.

    Concrete subclasses narrow ``root`` to ``Reference | T`` and set
    ``target`` to the entity class implementing :class:`FromRef` for ``T``.
    The reference branch is tried first, so any object carrying ``$ref``
    is a reference.
    """

    target: ClassVar[type[FromRef]]

    @property
    def is_reference(self) -> bool:
        """Whether this slot holds a ``$ref`` pointer."""
        return isinstance(self.root, Reference)

    @property
    def reference(self) -> Optional[str]:
        """The raw pointer, or ``None`` for inline values."""
        return self.root.ref if isinstance(self.root, Reference) else None

    @property
    def inline(self) -> Any:
        """The inline value, or ``None`` for references."""
        return None if isinstance(self.root, Reference) else self.root

    def resolve(self, document: Document) -> Any:
        """Return the inline value, or look the reference up in *document*.

        Inline values are returned as-is without touching *document*.
        References are handed to ``target.from_ref`` and any
        :class:`~specref.exceptions.RefError` it raises propagates.
        """
        return self._resolve(document, ())

    def _resolve(self, document: Document, seen: tuple[str, ...]) -> Any:
        if isinstance(self.root, Reference):
            return self.target._from_ref(document, self.root.ref, seen)
        return self.root


# --- Schema ---


class SchemaType(str, enum.Enum):
    """JSON Schema primitive types accepted in a schema's ``type`` keyword."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"


_TYPE_NAMES = frozenset(t.value for t in SchemaType)


class Encoding(str, enum.Enum):
    """Values of the ``contentEncoding`` keyword (RFC 4648 plus quoted-printable)."""

    BASE16 = "base16"
    HEX = "hex"
    BASE32 = "base32"
    BASE32HEX = "base32hex"
    BASE64 = "base64"
    BASE64URL = "base64url"
    QUOTED_PRINTABLE = "quoted-printable"


Number = Union[StrictInt, StrictFloat]


class Schema(FromRef, SpecObject):
    """The Schema Object: data types for inputs and outputs.

    An extended subset of JSON Schema as used by OpenAPI 3.1. Composition
    and structure keywords hold object-or-reference containers, so a schema
    is a node in a graph whose edges are either containment or ``$ref``
    pointers.

    See https://spec.openapis.org/oas/v3.1.0#schema-object.
    """

    ref_kind: ClassVar[RefKind] = RefKind.SCHEMA

    # display metadata
    title: Optional[str] = None
    description: Optional[str] = None

    # type
    schema_type: Optional[SchemaType] = Field(default=None, alias="type")

    # structure
    required: list[str] = Field(default_factory=list)
    items: Optional[SchemaOrReference] = None
    properties: dict[str, SchemaOrReference] = Field(default_factory=dict)
    additional_properties: Optional[SchemaOrBoolOrReference] = Field(
        default=None, alias="additionalProperties"
    )
    content_encoding: Optional[Encoding] = Field(default=None, alias="contentEncoding")
    content_media_type: Optional[str] = Field(default=None, alias="contentMediaType")

    # additional metadata
    default: Any = None
    examples: list[Any] = Field(default_factory=list)

    # validation requirements
    format: Optional[str] = None
    enum_values: list[Any] = Field(default_factory=list, alias="enum")
    pattern: Optional[str] = None
    multiple_of: Optional[Number] = Field(default=None, alias="multipleOf")
    minimum: Optional[Number] = None
    exclusive_maximum: Optional[Number] = Field(default=None, alias="exclusiveMaximum")
    maximum: Optional[Number] = None
    exclusive_minimum: Optional[Number] = Field(default=None, alias="exclusiveMinimum")
    min_length: Optional[int] = Field(default=None, alias="minLength", ge=0)
    max_length: Optional[int] = Field(default=None, alias="maxLength", ge=0)
    min_items: Optional[int] = Field(default=None, alias="minItems", ge=0)
    max_items: Optional[int] = Field(default=None, alias="maxItems", ge=0)
    unique_items: Optional[bool] = Field(default=None, alias="uniqueItems")
    max_properties: Optional[int] = Field(default=None, alias="maxProperties", ge=0)
    min_properties: Optional[int] = Field(default=None, alias="minProperties", ge=0)
    read_only: Optional[bool] = Field(default=None, alias="readOnly")
    write_only: Optional[bool] = Field(default=None, alias="writeOnly")

    # composition
    all_of: list[SchemaOrReference] = Field(default_factory=list, alias="allOf")
    one_of: list[SchemaOrReference] = Field(default_factory=list, alias="oneOf")
    any_of: list[SchemaOrReference] = Field(default_factory=list, alias="anyOf")

    @field_validator("schema_type", mode="before")
    @classmethod
    def _known_type(cls, value: Any) -> Any:
        if value is None or isinstance(value, SchemaType):
            return value
        if isinstance(value, str) and value in _TYPE_NAMES:
            return value
        raise UnknownTypeError(str(value))

    def children(self) -> Iterator[tuple[tuple[str, ...], ObjectOrReference]]:
        """Yield ``(segments, container)`` for every nested schema slot.

        Segments are the keys leading from this schema to the slot, e.g.
        ``("properties", "name")`` or ``("allOf", "0")``. Order is stable:
        ``properties`` by key, then ``items``, ``additionalProperties``,
        ``allOf``, ``oneOf``, ``anyOf``.
        """
        for name in sorted(self.properties):
            yield ("properties", name), self.properties[name]
        if self.items is not None:
            yield ("items",), self.items
        if self.additional_properties is not None:
            yield ("additionalProperties",), self.additional_properties
        for keyword, members in (
            ("allOf", self.all_of),
            ("oneOf", self.one_of),
            ("anyOf", self.any_of),
        ):
            for index, member in enumerate(members):
                yield (keyword, str(index)), member


class SchemaOrBool(FromRef, RootModel[Any]):
    """``additionalProperties`` value: a schema, or a literal boolean.

    The variant is picked from the shape of the input, not from a tag.
    """

    ref_kind: ClassVar[RefKind] = RefKind.SCHEMA

    root: Union[StrictBool, Schema] = Field(union_mode="left_to_right")

    @property
    def schema_(self) -> Optional[Schema]:
        """The schema variant, or ``None`` when this is a boolean."""
        return self.root if isinstance(self.root, Schema) else None

    @classmethod
    def _from_ref(
        cls, document: Document, path: str, seen: tuple[str, ...]
    ) -> SchemaOrBool:
        return cls(Schema._from_ref(document, path, seen))


class SchemaOrReference(ObjectOrReference):
    """A schema slot: an inline :class:`Schema` or a reference to one."""

    target: ClassVar[type[FromRef]] = Schema

    root: Union[Reference, Schema] = Field(union_mode="left_to_right")


class SchemaOrBoolOrReference(ObjectOrReference):
    """The ``additionalProperties`` slot: inline :class:`SchemaOrBool` or a reference."""

    target: ClassVar[type[FromRef]] = SchemaOrBool

    root: Union[Reference, SchemaOrBool] = Field(union_mode="left_to_right")


# --- Example ---


class Example(FromRef, SpecObject):
    """The Example Object.

    See https://spec.openapis.org/oas/v3.1.0#example-object.
    """

    ref_kind: ClassVar[RefKind] = RefKind.EXAMPLE

    summary: Optional[str] = None
    description: Optional[str] = None
    value: Any = None


class ExampleOrReference(ObjectOrReference):
    """An example slot: an inline :class:`Example` or a reference to one."""

    target: ClassVar[type[FromRef]] = Example

    root: Union[Reference, Example] = Field(union_mode="left_to_right")


# --- Document ---


_FIELD_FOR_KIND: dict[RefKind, str] = {
    RefKind.SCHEMA: "schemas",
    RefKind.RESPONSE: "responses",
    RefKind.PARAMETER: "parameters",
    RefKind.EXAMPLE: "examples",
    RefKind.REQUEST_BODY: "request_bodies",
    RefKind.HEADER: "headers",
    RefKind.SECURITY_SCHEME: "security_schemes",
    RefKind.LINK: "links",
    RefKind.CALLBACK: "callbacks",
    RefKind.PATH_ITEM: "path_items",
}


class Components(SpecObject):
    """The ``components`` object: one named collection per :class:`RefKind`.

    Only schemas and examples are modelled; the other collections keep their
    entries as raw JSON objects.
    """

    schemas: dict[str, SchemaOrReference] = Field(default_factory=dict)
    responses: dict[str, dict[str, Any]] = Field(default_factory=dict)
    parameters: dict[str, dict[str, Any]] = Field(default_factory=dict)
    examples: dict[str, ExampleOrReference] = Field(default_factory=dict)
    request_bodies: dict[str, dict[str, Any]] = Field(
        default_factory=dict, alias="requestBodies"
    )
    headers: dict[str, dict[str, Any]] = Field(default_factory=dict)
    security_schemes: dict[str, dict[str, Any]] = Field(
        default_factory=dict, alias="securitySchemes"
    )
    links: dict[str, dict[str, Any]] = Field(default_factory=dict)
    callbacks: dict[str, dict[str, Any]] = Field(default_factory=dict)
    path_items: dict[str, dict[str, Any]] = Field(
        default_factory=dict, alias="pathItems"
    )

    def collection(self, kind: RefKind) -> dict[str, Any]:
        """Return the mapping that stores components of *kind*."""
        return getattr(self, _FIELD_FOR_KIND[kind])

    def lookup(self, kind: RefKind, name: str) -> Optional[Any]:
        """Return the entry named *name* in the *kind* collection, or ``None``."""
        return self.collection(kind).get(name)


class Document(SpecObject):
    """An OpenAPI 3.x document.

    Top-level keys other than the ones modelled here (``servers``, ``tags``,
    extensions, ...) are kept as extra fields so they survive a round trip.
    The document is expected to be fully built before any resolution runs
    and is never mutated by it.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    openapi: Optional[str] = None
    info: dict[str, Any] = Field(default_factory=dict)
    paths: dict[str, Any] = Field(default_factory=dict)
    components: Optional[Components] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Document:
        """Build a document from a parsed JSON/YAML mapping.

        Raises:
            SpecParseError: If the mapping does not match the document model.
            UnknownTypeError: If a schema declares an unrecognised ``type``.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise SpecParseError(f"Invalid OpenAPI document: {exc}") from exc

    @classmethod
    def load(cls, source: str) -> Document:
        """Load, version-check, and validate a document from a file, URL, or ``-``.

        See :func:`specref.loader.load_document_dict` for supported sources.
        """
        from specref.loader import load_document_dict, validate_openapi_version

        data = load_document_dict(source)
        validate_openapi_version(data)
        return cls.from_dict(data)

    def lookup(self, kind: RefKind, name: str) -> Optional[Any]:
        """Return the stored entry for ``(kind, name)``, or ``None`` if absent."""
        if self.components is None:
            return None
        return self.components.lookup(kind, name)


# --- Configuration ---


class OutputConfig(BaseModel):
    """Output format preferences stored in :class:`Settings`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class Settings(BaseModel):
    """User and project settings, resolved by :func:`specref.config.resolve_config`.

    Persisted as JSON at ``~/.config/specref/config.json`` (user) and
    ``./specref.json`` (project).
    """

    separator: str = Field(
        default="/",
        min_length=1,
        max_length=1,
        description="Separator used when printing schema locations",
    )
    output: OutputConfig = Field(default_factory=OutputConfig)


Schema.model_rebuild()
SchemaOrBool.model_rebuild()
SchemaOrReference.model_rebuild()
SchemaOrBoolOrReference.model_rebuild()
Components.model_rebuild()
Document.model_rebuild()
