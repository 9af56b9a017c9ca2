"""
Analyzer module.

Contains the type graph resolver and the pieces it dispatches to: the
structure walker, the value set composer, name and reference resolution,
and the type registry.
"""

from __future__ import annotations

from .name_resolver import NameResolver
from .reference_resolver import ReferenceResolver
from .resolver import ResolveResult, TypeGraphResolver, resolve
from .structure_walker import StructureWalker
from .type_nodes import (
    ArrayType,
    EnumMember,
    EnumType,
    InterfaceType,
    ObjectType,
    PrimitiveType,
    Property,
    TypeCategory,
    TypeKind,
    TypeNode,
    TypeReference,
    UnionType,
    type_to_dict,
)
from .type_registry import TypeRegistry
from .value_set_composer import ValueSetComposer

__all__ = [
    "ArrayType",
    "EnumMember",
    "EnumType",
    "InterfaceType",
    "NameResolver",
    "ObjectType",
    "PrimitiveType",
    "Property",
    "ReferenceResolver",
    "ResolveResult",
    "StructureWalker",
    "TypeCategory",
    "TypeGraphResolver",
    "TypeKind",
    "TypeNode",
    "TypeReference",
    "TypeRegistry",
    "UnionType",
    "ValueSetComposer",
    "resolve",
    "type_to_dict",
]
