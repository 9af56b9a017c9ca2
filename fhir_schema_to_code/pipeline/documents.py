"""
Specification documents handed to the resolver.

A document map is keyed by resource id (StructureDefinition) or canonical
url (ValueSet, CodeSystem). The resolver treats it as read-only; per-run
visitation state lives in ``DocumentVisit`` records owned by the resolver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .analyzer.type_nodes import TypeNode


class DocumentCategory(str, Enum):
    """Resource types the resolver knows how to turn into types."""

    STRUCTURE_DEFINITION = "StructureDefinition"
    VALUE_SET = "ValueSet"
    CODE_SYSTEM = "CodeSystem"


class VisitState(Enum):
    """Visitation progress of a document within one resolver run."""

    UNVISITED = "unvisited"
    QUEUED = "queued"  # being processed; re-entry is a no-op
    PROCESSED = "processed"


@dataclass(frozen=True)
class Document:
    """A parsed specification file."""

    id: str
    filename: str
    content: dict[str, Any] | None = None

    @property
    def resource_type(self) -> str | None:
        if not self.content:
            return None
        return self.content.get("resourceType")

    @property
    def category(self) -> DocumentCategory | None:
        return document_category(self.content)


def document_category(content: dict[str, Any] | None) -> DocumentCategory | None:
    """Category of parsed content, None for resource types the resolver ignores."""
    if not content:
        return None
    try:
        return DocumentCategory(content.get("resourceType"))
    except ValueError:
        return None


DocumentMap = dict[str, Document]


@dataclass
class DocumentVisit:
    """Mutable per-run state attached to a document."""

    state: VisitState = VisitState.UNVISITED
    referenced: bool = False

    # Display name given by the first binding referencing a value set
    symbol: str | None = None

    # The node built for the document, if any
    type: TypeNode | None = field(default=None, repr=False)


def is_resource_definition(document: Document) -> bool:
    """Whether the document is a StructureDefinition of kind 'resource'."""
    return document.category is DocumentCategory.STRUCTURE_DEFINITION and document.content.get("kind") == "resource"


def is_constrained_type(document: Document) -> bool:
    """Whether the document only constrains another definition."""
    return bool(document.content) and document.content.get("derivation") == "constraint"
