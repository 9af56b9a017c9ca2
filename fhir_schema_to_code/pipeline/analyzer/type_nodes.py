"""
Type graph node definitions.

The graph is a closed family of node dataclasses, each tagged with a
``TypeKind``. Only ``TypeReference`` points at other nodes by name, so it is
the only kind that may take part in a cycle; array and union nodes own
their children.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TypeKind(Enum):
    """Kind of node in the type graph."""

    TYPE_REFERENCE = "type_reference"  # named reference resolved through the registry
    OBJECT_TYPE = "object_type"  # anonymous object with properties
    INTERFACE_TYPE = "interface_type"  # named object with optional base type
    ENUM_TYPE = "enum_type"  # value set or code system
    ARRAY_TYPE = "array_type"  # list[T]
    UNION_TYPE = "union_type"  # T | U | ...
    PRIMITIVE = "primitive"  # string, number, boolean


class TypeCategory(Enum):
    """Provenance of a node."""

    NONE = "none"
    PRIMITIVE = "primitive"
    DATA_TYPE = "data_type"
    RESOURCE = "resource"
    SUB_TYPE = "sub_type"
    VALUE_SET = "value_set"
    CODE_SYSTEM = "code_system"


OBJECT_KINDS = frozenset({TypeKind.OBJECT_TYPE, TypeKind.INTERFACE_TYPE})


@dataclass
class TypeReference:
    """A reference to a named type, optionally constrained by an enum or profile."""

    name: str = ""
    binding: str | None = None
    category: TypeCategory = TypeCategory.NONE
    description: str | None = None
    kind: TypeKind = field(default=TypeKind.TYPE_REFERENCE, init=False)


@dataclass
class Property:
    """A property of an object or interface type."""

    name: str = ""
    description: str | None = None
    type: TypeNode | None = None
    optional: bool = False


@dataclass
class ObjectType:
    """An object type with properties and no name of its own."""

    name: str | None = None
    properties: list[Property] = field(default_factory=list)
    category: TypeCategory = TypeCategory.NONE
    description: str | None = None
    kind: TypeKind = field(default=TypeKind.OBJECT_TYPE, init=False)


@dataclass
class InterfaceType:
    """A named object type, resource, data type or backbone sub-type."""

    name: str = ""
    base_type: str | None = None
    properties: list[Property] = field(default_factory=list)
    category: TypeCategory = TypeCategory.NONE
    description: str | None = None
    kind: TypeKind = field(default=TypeKind.INTERFACE_TYPE, init=False)


@dataclass
class EnumMember:
    """A member of an enum type.

    ``parent`` is a lookup-only back-reference used by "is-a" filters; it
    takes no part in equality.
    """

    name: str = ""
    value: str = ""
    description: str | None = None
    display: str | None = None
    system: str | None = None
    case_sensitive: bool | None = None
    parent: EnumMember | None = field(default=None, compare=False, repr=False)


@dataclass
class EnumType:
    """An enumerated type built from a value set or code system."""

    name: str = ""
    members: list[EnumMember] = field(default_factory=list)
    category: TypeCategory = TypeCategory.NONE
    description: str | None = None
    kind: TypeKind = field(default=TypeKind.ENUM_TYPE, init=False)


@dataclass
class ArrayType:
    """A list of one element type."""

    element_type: TypeNode | None = None
    category: TypeCategory = TypeCategory.NONE
    kind: TypeKind = field(default=TypeKind.ARRAY_TYPE, init=False)


@dataclass
class UnionType:
    """A union of several types."""

    types: list[TypeNode] = field(default_factory=list)
    category: TypeCategory = TypeCategory.NONE
    kind: TypeKind = field(default=TypeKind.UNION_TYPE, init=False)


@dataclass
class PrimitiveType:
    """A primitive mapped onto an intrinsic representation."""

    name: str = ""
    intrinsic_type: str | None = None  # "string", "number", "boolean"
    category: TypeCategory = TypeCategory.PRIMITIVE
    description: str | None = None
    kind: TypeKind = field(default=TypeKind.PRIMITIVE, init=False)


TypeNode = TypeReference | ObjectType | InterfaceType | EnumType | ArrayType | UnionType | PrimitiveType


def create_type_reference(name: str, binding: str | None = None) -> TypeReference:
    return TypeReference(name=name, binding=binding)


def create_interface_type(name: str, category: TypeCategory, base_type: str | None = None) -> InterfaceType:
    return InterfaceType(name=name, category=category, base_type=base_type)


def create_object_type() -> ObjectType:
    return ObjectType()


def create_enum_type(name: str, category: TypeCategory, description: str | None = None) -> EnumType:
    return EnumType(name=name, category=category, description=description)


def create_array_type(element_type: TypeNode) -> ArrayType:
    return ArrayType(element_type=element_type)


def create_union_type(types: list[TypeNode]) -> UnionType:
    return UnionType(types=list(types))


def create_primitive_type(name: str, intrinsic_type: str | None) -> PrimitiveType:
    return PrimitiveType(name=name, intrinsic_type=intrinsic_type)


def is_object_type(node: TypeNode | None) -> bool:
    """Whether the node has properties that can be walked."""
    return node is not None and node.kind in OBJECT_KINDS


def _property_to_dict(prop: Property) -> dict[str, Any]:
    return {
        "name": prop.name,
        "description": prop.description,
        "type": type_to_dict(prop.type) if prop.type is not None else None,
        "optional": prop.optional,
    }


def _member_to_dict(member: EnumMember) -> dict[str, Any]:
    return {
        "name": member.name,
        "value": member.value,
        "description": member.description,
        "display": member.display,
        "system": member.system,
        "case_sensitive": member.case_sensitive,
    }


def type_to_dict(node: TypeNode) -> dict[str, Any]:
    """Serialize a node (and the nodes it owns) to plain JSON-compatible data."""
    data: dict[str, Any] = {"kind": node.kind.value, "category": node.category.value}

    match node.kind:
        case TypeKind.TYPE_REFERENCE:
            data["name"] = node.name
            if node.binding:
                data["binding"] = node.binding
        case TypeKind.OBJECT_TYPE | TypeKind.INTERFACE_TYPE:
            data["name"] = node.name
            data["description"] = node.description
            if node.kind is TypeKind.INTERFACE_TYPE:
                data["base_type"] = node.base_type
            data["properties"] = [_property_to_dict(p) for p in node.properties]
        case TypeKind.ENUM_TYPE:
            data["name"] = node.name
            data["description"] = node.description
            data["members"] = [_member_to_dict(m) for m in node.members]
        case TypeKind.ARRAY_TYPE:
            data["element_type"] = type_to_dict(node.element_type)
        case TypeKind.UNION_TYPE:
            data["types"] = [type_to_dict(t) for t in node.types]
        case TypeKind.PRIMITIVE:
            data["name"] = node.name
            data["description"] = node.description
            data["intrinsic_type"] = node.intrinsic_type

    return data
