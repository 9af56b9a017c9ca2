"""
Name resolver for enum members and enum types.

Member names are derived from concept codes, displays and definitions and
then made unique within their enum. The order in which candidates and
fallbacks are tried fixes the generated identifiers, so it must not change.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from ...utils import pascal_case, starts_with_number
from ..config import ResolverConfig
from .type_nodes import EnumMember

# Codes that have no usable spelling as an identifier
MAPPED_CODE_NAMES = {
    "=": "Equals",
    "<": "LessThan",
    "<=": "LessThanOrEqual",
    ">": "GreaterThan",
    ">=": "GreaterThanOrEqual",
}


class NameResolver:
    """Derives enum names and resolves member name collisions."""

    def __init__(self, config: ResolverConfig | None = None):
        self.config = config or ResolverConfig()

    @property
    def max_name_length(self) -> int:
        return self.config.max_name_length

    def format_name(self, name: str) -> str:
        """PascalCase the name, prefixing '_' when it would start with a digit."""
        name = pascal_case(name)
        if starts_with_number(name):
            name = "_" + name
        return name

    def enum_type_name(self, content: dict[str, Any], symbol: str | None, url: str) -> str:
        """
        Name of the enum type built for a value set or code system.

        Args:
            content: The document content
            symbol: Name given by the first binding referencing the document
            url: The document id, used when nothing better is known
        """
        name = content.get("name")
        if not name or " " in name:
            name = symbol
        if not name:
            name = url.split("/")[-1]
        return self.format_name(name)

    def member_description(self, concept: dict[str, Any]) -> str | None:
        """Definition of a concept, falling back to its extension or a multi-word display."""
        if concept.get("definition"):
            return concept["definition"]

        for extension in concept.get("extension") or []:
            if extension.get("url") == self.config.value_set_definition_extension:
                if extension.get("valueString"):
                    return extension["valueString"]
                break

        display = concept.get("display")
        if display and " " in display:
            return display
        return None

    def member_name(self, concept: dict[str, Any]) -> str | None:
        """Derive the name of the member built for a concept. None if nothing usable."""
        code = concept.get("code")

        name = MAPPED_CODE_NAMES.get(code)
        if not name:
            display = (concept.get("display") or "").strip()
            if display and len(display) < self.max_name_length:
                name = display.replace("*", "Star")
            elif code and not starts_with_number(code):
                name = code
            else:
                description = (self.member_description(concept) or "").strip()
                if description and len(description) < self.max_name_length:
                    name = description
                else:
                    name = code

        if not name:
            return None
        return self.format_name(name)

    def alternate_name(self, member: EnumMember) -> str | None:
        """Second-choice name for a member: its code, else a short description."""
        name = None
        if member.value and not starts_with_number(member.value):
            name = member.value
        elif member.description and len(member.description) < self.max_name_length:
            name = member.description

        if name:
            return self.format_name(name)
        return None

    @staticmethod
    def find_duplicate(member: EnumMember, members: list[EnumMember]) -> EnumMember | None:
        for current in members:
            if current.name == member.name:
                return current
        return None

    @staticmethod
    def is_name_taken(name: str, members: list[EnumMember], ignore: EnumMember | None = None) -> bool:
        return any(current.name == name for current in members if current is not ignore)

    def adjust_member_name(self, member: EnumMember, members: list[EnumMember]) -> bool:
        """
        Make member's name unique among members.

        Renames ``member`` (or, failing that, the clashing member) in place.
        Names already unique among ``members`` stay unique.

        Returns:
            False if an identical member is already present and member should be dropped
        """
        duplicate = self.find_duplicate(member, members)
        if duplicate is None:
            return True

        if duplicate == member:
            return False

        original_name = member.name

        alternate = self.alternate_name(member)
        if alternate:
            if not self.is_name_taken(alternate, members):
                member.name = alternate
                logger.debug(f"Enum member '{original_name}' renamed to '{alternate}'")
                return True

            # Try moving the existing member out of the way instead
            alternate = self.alternate_name(duplicate)
            if alternate and alternate != original_name and not self.is_name_taken(alternate, members, duplicate):
                duplicate.name = alternate
                logger.debug(f"Enum member '{original_name}' kept, existing member renamed to '{alternate}'")
                return True

        num = 1
        while True:
            member.name = f"{original_name}_{num}"
            num += 1
            if self.find_duplicate(member, members) is None:
                break

        logger.debug(f"Enum member '{original_name}' renamed to '{member.name}'")
        return True
