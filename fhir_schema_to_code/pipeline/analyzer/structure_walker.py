"""
Builds interface and primitive types from StructureDefinition documents.

The differential element list is walked in document order. Each element
path ("Observation.component.code") names a property on the type reached
by the path prefix; backbone elements become sub-types of their own,
polymorphic "[x]" elements expand to one property per type option, and
bindings attach the enum type of the bound value set.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from ...exceptions import ResolutionError
from ...utils import pascal_case
from ..documents import Document, is_resource_definition
from .type_nodes import (
    EnumType,
    InterfaceType,
    ObjectType,
    Property,
    TypeCategory,
    TypeKind,
    TypeNode,
    TypeReference,
    UnionType,
    create_array_type,
    create_interface_type,
    create_primitive_type,
    create_type_reference,
    create_union_type,
    is_object_type,
)

if TYPE_CHECKING:
    from .resolver import TypeGraphResolver

# StructureDefinition kinds handled as data types
TYPE_KINDS = frozenset({"constraint", "datatype", "type", "complex-type", "primitive-type"})

# Element types that introduce an inline sub-type
SUB_TYPE_BASES = frozenset({"Element", "BackboneElement"})

POLYMORPHIC_MARKER = "[x]"

# Intrinsic representation of each primitive type
PRIMITIVE_TYPES = {
    "instant": "string",
    "time": "string",
    "date": "string",
    "dateTime": "string",
    "decimal": "number",
    "boolean": "boolean",
    "integer": "number",
    "base64Binary": "string",
    "string": "string",
    "uri": "string",
    "url": "string",
    "canonical": "string",
    "uuid": "string",
    "unsignedInt": "number",
    "positiveInt": "number",
    "code": "string",
    "id": "string",
    "oid": "string",
    "markdown": "string",
}

# Type options standing for an open type element ("*")
OPEN_TYPE_CODES = [
    "integer",
    "decimal",
    "dateTime",
    "date",
    "instant",
    "time",
    "string",
    "uri",
    "boolean",
    "code",
    "base64Binary",
    "Coding",
    "CodeableConcept",
    "Attachment",
    "Identifier",
    "Quantity",
    "Range",
    "Period",
    "Ratio",
    "HumanName",
    "Address",
    "ContactPoint",
    "Timing",
    "Signature",
    "Reference",
]


def property_name_from_path(path: str | None) -> str | None:
    if path:
        return path.split(".")[-1]
    return None


def combine_property_name_with_type(property_name: str, type_name: str) -> str:
    """e.g. ("value[x]", "dateTime") -> "valueDateTime"."""
    return property_name.replace(POLYMORPHIC_MARKER, pascal_case(type_name))


def find_property(object_type: ObjectType | InterfaceType, name: str) -> Property | None:
    for prop in object_type.properties:
        if prop.name == name:
            return prop
    return None


class StructureWalker:
    """Builds the node for one StructureDefinition document."""

    def __init__(self, resolver: TypeGraphResolver):
        self.resolver = resolver
        self.documents = resolver.documents
        self.registry = resolver.registry
        self.references = resolver.references

    def process_structure_definition(self, document: Document) -> TypeNode | None:
        kind = document.content.get("kind")

        if kind == "resource":
            return self.process_type_definition(document)

        if kind in TYPE_KINDS:
            if self.is_primitive(document):
                return self.process_primitive(document)
            return self.process_type_definition(document)

        raise ResolutionError(f"Unknown content kind '{kind}'.")

    # Primitives

    @staticmethod
    def _elements(document: Document) -> list[dict[str, Any]]:
        differential = document.content.get("differential") or {}
        return differential.get("element") or []

    def is_primitive(self, document: Document) -> bool:
        """Whether the root element describes a primitive type."""
        for element in self._elements(document):
            if "." not in element.get("path", ""):
                return "Primitive" in (element.get("short") or "")
        return False

    def process_primitive(self, document: Document) -> TypeNode:
        content = document.content
        type_id = content.get("id")

        description = None
        for element in self._elements(document):
            if element.get("path") == type_id:
                description = element.get("definition")

        intrinsic_type = PRIMITIVE_TYPES.get(type_id)
        if intrinsic_type is None:
            self.resolver.add_error(f"Unknown primitive type '{type_id}'.")

        primitive = create_primitive_type(type_id, intrinsic_type)
        primitive.description = description
        self.resolver.publish(document, primitive)
        return primitive

    # Interfaces

    def process_type_definition(self, document: Document) -> InterfaceType | None:
        content = document.content
        type_id = content.get("id")
        if not type_id:
            return None

        category = TypeCategory.RESOURCE if is_resource_definition(document) else TypeCategory.DATA_TYPE
        interface = create_interface_type(type_id, category)
        # Published early: the base chain and nested lookups may come back to this type
        self.resolver.publish(document, interface)

        base_definition = content.get("baseDefinition")
        if isinstance(base_definition, str):
            interface.base_type = self.references.resource_name_from_profile(base_definition)

            if interface.base_type:
                base_document = self.documents.get(interface.base_type)
                # A base whose own build failed has no node to derive from
                if base_document is None or self.resolver.reference_document(base_document) is None:
                    raise ResolutionError(f"Unknown base type '{interface.base_type}'.")

        for index, element in enumerate(self._elements(document)):
            path = element.get("path") or ""

            if "." not in path:
                interface.description = element.get("short")
                continue

            property_name = property_name_from_path(path)
            if not property_name:
                raise ResolutionError(f"Missing property name for element {index}.")

            containing_type = self.containing_type_for_element(interface, path)

            if len(property_name) > len(POLYMORPHIC_MARKER) and property_name.endswith(POLYMORPHIC_MARKER):
                self._add_polymorphic_properties(containing_type, property_name, element)
            elif element.get("max") != "0":
                # max "0" removes a property inherited from the base type
                property_type = self.property_type_for_element(interface, element)
                containing_type.properties.append(
                    Property(
                        name=property_name,
                        description=element.get("short"),
                        type=property_type,
                        optional=element.get("min") == 0,
                    )
                )

        self._add_compatibility_properties(interface)
        return interface

    def _add_polymorphic_properties(
        self,
        containing_type: ObjectType | InterfaceType,
        property_name: str,
        element: dict[str, Any],
    ) -> None:
        type_references = self.type_references(element.get("type"))
        if not type_references:
            raise ResolutionError(f"No types specified for '{property_name}'.")

        last_property: Property | None = None
        last_type_name = ""

        for type_reference in type_references:
            # Consecutive options of the same type (e.g. Reference(A), Reference(B)) share a property
            if last_property is not None and type_reference.name == last_type_name:
                if isinstance(last_property.type, UnionType):
                    last_property.type.types.append(type_reference)
                else:
                    last_property.type = create_union_type([last_property.type, type_reference])
                continue

            last_property = Property(
                name=combine_property_name_with_type(property_name, type_reference.name),
                description=element.get("short"),
                type=type_reference,
                optional=True,
            )
            containing_type.properties.append(last_property)
            last_type_name = type_reference.name

    @staticmethod
    def _add_compatibility_properties(interface: InterfaceType) -> None:
        if interface.name == "Resource" and not find_property(interface, "resourceType"):
            interface.properties.insert(
                0,
                Property(
                    name="resourceType",
                    description="The type of the resource.",
                    type=create_type_reference("code"),
                    optional=True,
                ),
            )

        if interface.name == "Element" and not find_property(interface, "fhir_comments"):
            interface.properties.insert(
                0,
                Property(
                    name="fhir_comments",
                    description="Content that would be comments in an XML.",
                    type=create_array_type(create_type_reference("string")),
                    optional=True,
                ),
            )

    # Paths

    def containing_type_for_element(self, root: InterfaceType, path: str) -> ObjectType | InterfaceType:
        """Return the type that owns the property named by the last path segment."""
        parts = path.split(".")
        root_name = parts[0]
        if not root_name:
            raise ResolutionError(f"Missing root name in path '{path}'.")

        if not self.has_base_interface(root, root_name):
            raise ResolutionError(f"Expected '{root_name}' to be a '{root.name}'.")

        return self._containing_type_for_path(root, parts[1:])

    def has_base_interface(self, interface: InterfaceType, name: str) -> bool:
        """Whether name is the interface itself or one of its ancestors."""
        current: TypeNode | None = interface
        seen: set[str] = set()

        while isinstance(current, InterfaceType) and current.name not in seen:
            if current.name == name:
                return True
            seen.add(current.name)
            current = self.registry.lookup(current.base_type)

        return False

    def _containing_type_for_path(
        self,
        parent: ObjectType | InterfaceType,
        parts: list[str],
    ) -> ObjectType | InterfaceType:
        for property_name in parts[:-1]:
            prop = find_property(parent, property_name)
            if prop is None:
                raise ResolutionError(f"Could not find property '{property_name}' on type '{parent.name}'.")

            current = self.referenced_type(prop.type)
            if current is None:
                raise ResolutionError(f"Could not find type for property '{property_name}'.")
            if not is_object_type(current):
                raise ResolutionError(f"Expected property '{property_name}' to reference an object type.")

            parent = current

        return parent

    def referenced_type(self, node: TypeNode | None, category: TypeCategory | None = None) -> TypeNode | None:
        """
        Follow arrays and type references to the node they stand for.

        Args:
            node: The node to resolve
            category: When given, references to types of another category resolve to None
        """
        while node is not None and node.kind is TypeKind.ARRAY_TYPE:
            node = node.element_type

        if isinstance(node, TypeReference):
            node = self.registry.lookup(node.name)
            if node is not None and category is not None and node.category is not category:
                return None

        return node

    # Property types

    def property_type_for_element(self, root: InterfaceType, element: dict[str, Any]) -> TypeNode:
        content_reference = element.get("contentReference")
        if content_reference:
            element_type = self._content_reference_type(root, content_reference)
        else:
            element_type = self._declared_type(element)

        if element.get("max") != "1":
            return create_array_type(element_type)
        return element_type

    def _content_reference_type(self, root: InterfaceType, content_reference: str) -> TypeReference:
        if not content_reference.startswith("#"):
            raise ResolutionError(f"Expected content reference '{content_reference}' to start with #.")

        match = self.find_type_of_first_property(root, property_name_from_path(content_reference), set())
        referenced = self.referenced_type(match)
        if referenced is None:
            raise ResolutionError(f"Could not resolve content reference '{content_reference}'.")

        if not isinstance(referenced, InterfaceType):
            raise ResolutionError("Expected content reference to resolve to an interface type.")

        return create_type_reference(referenced.name)

    def find_type_of_first_property(
        self,
        object_type: ObjectType | InterfaceType,
        name: str,
        checked: set[int],
    ) -> TypeNode | None:
        """Depth-first search of the property tree below object_type for a property called name."""
        if id(object_type) in checked:
            return None
        checked.add(id(object_type))

        for prop in object_type.properties:
            if prop.name == name:
                return prop.type

            property_type = self.referenced_type(prop.type, TypeCategory.SUB_TYPE)
            if is_object_type(property_type):
                match = self.find_type_of_first_property(property_type, name, checked)
                if match is not None:
                    return match

        return None

    def _declared_type(self, element: dict[str, Any]) -> TypeNode:
        path = element.get("path")

        type_references = self.type_references(element.get("type"))
        if not type_references:
            raise ResolutionError(f"Expected type for {path}.")

        if len(type_references) == 1:
            element_type: TypeNode = type_references[0]
            if element_type.name in SUB_TYPE_BASES:
                element_type = self.create_sub_type(element, element_type.name)
        else:
            element_type = create_union_type(type_references)

        binding = element.get("binding")
        if binding and binding.get("strength") != "example":
            binding_name = self.binding_reference(element)
            if binding_name:
                if isinstance(element_type, TypeReference):
                    element_type.binding = binding_name
                else:
                    self.resolver.add_error(f"Expected type reference for binding on '{path}'.")

        return element_type

    def create_sub_type(self, element: dict[str, Any], base_type: str) -> TypeReference:
        """Register a new sub-type for a backbone element and return a reference to it."""
        name = pascal_case(element.get("path"))
        sub_type = create_interface_type(name, TypeCategory.SUB_TYPE, base_type=base_type)
        sub_type.description = element.get("short")

        logger.debug(f"Created sub-type '{name}' deriving from '{base_type}'")
        self.resolver.add_type(sub_type)

        return create_type_reference(name)

    def type_references(self, types: Any) -> list[TypeReference] | None:
        """Build one reference per declared type option, expanding open types."""
        if not types:
            return None

        if not isinstance(types, list):
            raise ResolutionError("Expected array of types.")

        type_elements: list[dict[str, Any]] = []
        for type_element in types:
            if isinstance(type_element, dict) and type_element.get("code") == "*":
                type_elements.extend({"code": code} for code in OPEN_TYPE_CODES)
            else:
                type_elements.append(type_element)

        result: list[TypeReference] = []

        for type_element in type_elements:
            type_name = type_element.get("code") if isinstance(type_element, dict) else None
            if not type_name:
                raise ResolutionError("Missing type name.")

            if type_name == "xhtml":
                type_name = "string"
            else:
                type_document = self.documents.get(type_name)
                if type_document is None:
                    raise ResolutionError(f"Unknown type '{type_name}'.")
                self.resolver.reference_document(type_document)

            type_reference = create_type_reference(type_name)

            profile = self.references.type_profile(type_element)
            if profile:
                resource_name = self.references.resource_name_from_profile(profile)
                if resource_name:
                    if resource_name != "any":
                        resource_document = self.documents.get(resource_name)
                        if resource_document is None:
                            self.resolver.add_error(f"Unknown profile '{resource_name}'.")
                        else:
                            self.resolver.reference_document(resource_document)

                    type_reference.binding = resource_name

            result.append(type_reference)

        return result

    # Bindings

    def binding_reference(self, element: dict[str, Any]) -> str | None:
        """Name of the enum type bound to an element, or None."""
        target = self.references.binding_target(element["binding"])
        if not target:
            return None

        binding_document = self.references.value_set_document(target)
        if binding_document is None:
            self.resolver.add_error(f"Unknown binding reference '{target}'.")
            return None

        # Value sets can be examples even when the binding does not say so
        if self.references.is_apparent_example(binding_document):
            return None

        visit = self.resolver.visit(binding_document)
        if not visit.symbol:
            # Value sets without a usable name are named after their first binding
            visit.symbol = pascal_case(element.get("path"))

        node = self.resolver.reference_document(binding_document)
        if not isinstance(node, EnumType):
            self.resolver.add_error(f"Unable to resolve binding reference '{target}'.")
            return None

        return node.name
