"""Tests for the name-keyed type registry."""

from fhir_schema_to_code.pipeline.analyzer import TypeCategory, TypeRegistry
from fhir_schema_to_code.pipeline.analyzer.type_nodes import create_interface_type, create_primitive_type


def make_registry(defs, visited):
    def reference_document(document):
        visited.append(document.id)
        node = create_primitive_type(document.id, "string")
        registry.register(node)
        return node

    registry = TypeRegistry(defs.documents, reference_document)
    return registry


def test_register_refuses_collisions(defs):
    registry = make_registry(defs, [])
    first = create_interface_type("Patient", TypeCategory.RESOURCE)

    assert registry.register(first)
    assert not registry.register(create_interface_type("Patient", TypeCategory.DATA_TYPE))
    assert registry.get("Patient") is first
    assert registry.get("Patient").category is TypeCategory.RESOURCE


def test_get_never_resolves(defs):
    visited = []
    defs.primitive("string")
    registry = make_registry(defs, visited)

    assert registry.get("string") is None
    assert registry.get(None) is None
    assert visited == []


def test_lookup_resolves_on_miss(defs):
    visited = []
    defs.primitive("string")
    registry = make_registry(defs, visited)

    node = registry.lookup("string")

    assert node.name == "string"
    assert registry.lookup("string") is node
    assert visited == ["string"]


def test_lookup_unknown_name(defs):
    visited = []
    registry = make_registry(defs, visited)

    assert registry.lookup("Missing") is None
    assert registry.lookup(None) is None
    assert visited == []
