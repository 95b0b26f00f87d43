"""Tests for specref.resolver."""

from __future__ import annotations

import pytest

from specref.exceptions import UnresolvableError
from specref.models import Document, Schema, SchemaType
from specref.resolver import inline_component, inline_refs


def _doc(schemas: dict) -> Document:
    return Document.from_dict({"components": {"schemas": schemas}})


class TestInlineRefs:
    """Test inline_refs on explicit schemas."""

    def test_no_refs_passthrough(self) -> None:
        schema = Schema.model_validate(
            {"type": "object", "properties": {"a": {"type": "string"}}}
        )
        assert inline_refs(schema, Document()) == schema

    def test_inlines_property_and_items(self, petstore: Document) -> None:
        schema = Schema.model_validate(
            {
                "type": "object",
                "properties": {"name": {"$ref": "#/components/schemas/NameType"}},
                "items": {"$ref": "#/components/schemas/NameType"},
            }
        )
        result = inline_refs(schema, petstore)

        assert result.properties["name"].inline.schema_type is SchemaType.STRING
        assert result.items.inline.min_length == 1

    def test_inlines_nested_refs(self, petstore: Document) -> None:
        result = inline_component(petstore, "PetList")

        pet = result.items.inline
        assert pet.schema_type is SchemaType.OBJECT
        assert pet.properties["name"].inline.schema_type is SchemaType.STRING

    def test_does_not_mutate_input(self, petstore: Document) -> None:
        schema = Schema.model_validate({"items": {"$ref": "#/components/schemas/Pet"}})
        inline_refs(schema, petstore)
        assert schema.items.reference == "#/components/schemas/Pet"
        assert petstore.components.schemas["PetList"].inline.items.is_reference

    def test_inlines_composition_and_additional_properties(self) -> None:
        document = _doc(
            {
                "Base": {"type": "object"},
                "Value": {"type": "integer"},
            }
        )
        schema = Schema.model_validate(
            {
                "allOf": [{"$ref": "#/components/schemas/Base"}],
                "anyOf": [{"type": "null"}, {"$ref": "#/components/schemas/Value"}],
                "additionalProperties": {"$ref": "#/components/schemas/Value"},
            }
        )
        result = inline_refs(schema, document)

        assert result.all_of[0].inline.schema_type is SchemaType.OBJECT
        assert result.any_of[1].inline.schema_type is SchemaType.INTEGER
        assert result.additional_properties.inline.schema_.schema_type is SchemaType.INTEGER

    def test_boolean_additional_properties_kept(self) -> None:
        schema = Schema.model_validate({"additionalProperties": False})
        assert inline_refs(schema, Document()) == schema

    def test_missing_target_raises(self) -> None:
        schema = Schema.model_validate({"items": {"$ref": "#/components/schemas/Gone"}})
        with pytest.raises(UnresolvableError):
            inline_refs(schema, Document())


class TestInlineCycles:
    """Test that recursive schemas keep their reference at the cycle point."""

    def test_self_reference_kept(self, petstore: Document) -> None:
        result = inline_component(petstore, "TreeNode")

        children = result.properties["children"].inline
        assert children.items.reference == "#/components/schemas/TreeNode"

    def test_inline_refs_expands_one_level_of_recursion(self, petstore: Document) -> None:
        tree = Schema.from_ref(petstore, "#/components/schemas/TreeNode")
        result = inline_refs(tree, petstore)

        first = result.properties["children"].inline.items.inline
        assert first.schema_type is SchemaType.OBJECT
        nested = first.properties["children"].inline.items
        assert nested.reference == "#/components/schemas/TreeNode"

    def test_mutual_recursion_terminates(self) -> None:
        document = _doc(
            {
                "A": {"type": "object", "properties": {"b": {"$ref": "#/components/schemas/B"}}},
                "B": {"type": "object", "properties": {"a": {"$ref": "#/components/schemas/A"}}},
            }
        )
        result = inline_component(document, "A")

        b = result.properties["b"].inline
        assert b.properties["a"].reference == "#/components/schemas/A"

    def test_parallel_branches_same_ref(self) -> None:
        document = _doc({"T": {"type": "string"}})
        schema = Schema.model_validate(
            {
                "properties": {
                    "x": {"$ref": "#/components/schemas/T"},
                    "y": {"$ref": "#/components/schemas/T"},
                }
            }
        )
        result = inline_refs(schema, document)

        assert result.properties["x"].inline == Schema(schema_type=SchemaType.STRING)
        assert result.properties["y"].inline == Schema(schema_type=SchemaType.STRING)

    def test_alias_component(self, petstore: Document) -> None:
        assert inline_component(petstore, "Animal") == inline_component(petstore, "Pet")
