"""
Builds enum types from ValueSet and CodeSystem documents.

Value sets are composed from ``compose.include`` entries: inline concepts
of a coding system (narrowed against that system when it is available),
``is-a`` filters over the system's concept hierarchy and imports of other
value sets. Members are merged through the name resolver so that names
stay unique within each enum.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any

from ..documents import Document
from .type_nodes import EnumMember, EnumType, TypeCategory, create_enum_type

if TYPE_CHECKING:
    from .resolver import TypeGraphResolver


class ValueSetComposer:
    """Builds ``EnumType`` nodes for value sets and code systems."""

    def __init__(self, resolver: TypeGraphResolver):
        self.resolver = resolver
        self.names = resolver.names
        self.references = resolver.references

    def process_code_system(self, document: Document) -> EnumType:
        content = document.content
        enum_type = create_enum_type(
            self._enum_name(document),
            TypeCategory.CODE_SYSTEM,
            description=content.get("description"),
        )
        enum_type.members = self.process_concepts(content.get("concept"), content.get("caseSensitive"), content.get("url"))
        self.resolver.publish(document, enum_type)
        return enum_type

    def process_value_set(self, document: Document) -> EnumType:
        content = document.content
        enum_type = create_enum_type(
            self._enum_name(document),
            TypeCategory.VALUE_SET,
            description=content.get("description"),
        )
        # Published before composing so that self-imports see the node
        self.resolver.publish(document, enum_type)

        compose = content.get("compose") or {}
        for include in compose.get("include") or []:
            self._combine(enum_type, self._process_include(enum_type, include))

        return enum_type

    def process_concepts(
        self,
        concepts: list[dict[str, Any]] | None,
        case_sensitive: bool | None,
        system: str | None,
    ) -> list[EnumMember]:
        """Build one member per concept. Nested concepts are not flattened."""
        members: list[EnumMember] = []

        for concept in concepts or []:
            name = self.names.member_name(concept)
            if not name:
                self.resolver.add_error("Unable to determine name for value set concept.")
                continue

            member = EnumMember(
                name=name,
                value=concept.get("code"),
                description=self.names.member_description(concept),
                system=system,
                case_sensitive=case_sensitive,
            )

            display = (concept.get("display") or "").strip()
            if display:
                member.display = display

            members.append(member)

        return members

    def _enum_name(self, document: Document) -> str:
        symbol = self.resolver.visit(document).symbol
        return self.names.enum_type_name(document.content, symbol, document.id)

    def _combine(self, enum_type: EnumType, members: list[EnumMember]) -> None:
        for member in members:
            # Copy so that renames never leak into the source enum
            member = replace(member)
            if self.names.adjust_member_name(member, enum_type.members):
                enum_type.members.append(member)

    def _process_include(self, enum_type: EnumType, include: dict[str, Any]) -> list[EnumMember]:
        system = include.get("system")
        if system:
            members = self.process_concepts(include.get("concept"), True, system)
            members = self._substitute_codes_from_original_system(system, members)

            for include_filter in include.get("filter") or []:
                self._process_filter(system, include_filter, members)

            return members

        imports = include.get("valueSet") or []
        if isinstance(imports, str):
            imports = [imports]
        for url in imports:
            self._combine(enum_type, self._process_import(url))

        return []

    def _system_members(self, url: str) -> list[EnumMember] | None:
        """Members of the enum built for url, or None if it has none."""
        document = self.references.value_set_document(url)
        if document is None:
            return None

        node = self.resolver.process_document(document)
        if isinstance(node, EnumType):
            return node.members
        return None

    def _substitute_codes_from_original_system(self, url: str, members: list[EnumMember]) -> list[EnumMember]:
        system_members = self._system_members(url)
        if system_members is None:
            return members

        if not members:
            return list(system_members)

        codes = {member.value for member in members}
        return [member for member in system_members if member.value in codes]

    def _process_filter(self, url: str, include_filter: dict[str, Any], members: list[EnumMember]) -> None:
        if self.references.value_set_document(url) is None:
            return

        op = include_filter.get("op")
        if op != "is-a":
            self.resolver.add_error(f"Do not know how to process filter operation '{op}'.")
            return

        filter_property = include_filter.get("property")
        if filter_property != "concept":
            self.resolver.add_error(f"Do not know how to process filter property '{filter_property}'.")
            return

        code = include_filter.get("value")
        for member in self._system_members(url) or []:
            if enum_member_is_a(member, code):
                members.append(member)

    def _process_import(self, url: str) -> list[EnumMember]:
        document = self.references.value_set_document(url)
        if document is None:
            self.resolver.add_error(
                f"Unable to process import statement for '{url}' because value set with id '{url}' could not be found."
            )
            return []

        node = self.resolver.process_document(document)
        if isinstance(node, EnumType):
            return node.members
        return []


def enum_member_is_a(member: EnumMember, code: str) -> bool:
    """Whether member or one of its ancestors has the given code."""
    current: EnumMember | None = member
    while current is not None:
        if current.value == code:
            return True
        current = current.parent
    return False
