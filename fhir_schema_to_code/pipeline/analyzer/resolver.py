"""
Type graph resolver.

Walks the document map depth-first starting from every resource
definition, building one node per reachable document. Documents are
visited at most once per run; re-entering a document that is still being
processed is a no-op, which is what keeps inheritance and binding cycles
finite.

Errors never stop the run. They are collected, prefixed with the name of
the file being processed, and returned next to the types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from ...exceptions import ResolutionError
from ..config import ResolverConfig
from ..documents import (
    Document,
    DocumentCategory,
    DocumentMap,
    DocumentVisit,
    VisitState,
    is_constrained_type,
    is_resource_definition,
)
from .name_resolver import NameResolver
from .reference_resolver import ReferenceResolver
from .structure_walker import StructureWalker
from .type_nodes import TypeNode, type_to_dict
from .type_registry import TypeRegistry
from .value_set_composer import ValueSetComposer


@dataclass
class ResolveResult:
    """Types in first-visitation order and the errors met while building them."""

    types: list[TypeNode] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "types": [type_to_dict(t) for t in self.types],
            "errors": list(self.errors),
        }


class TypeGraphResolver:
    """Builds the type graph for one document map. Use once per run."""

    def __init__(self, documents: DocumentMap, config: ResolverConfig | None = None):
        """
        Initialize the resolver.

        Args:
            documents: Document map keyed by resource id or canonical url
            config: Resolver configuration (defaults apply when None)
        """
        self.documents = documents
        self.config = config or ResolverConfig()

        self.result = ResolveResult()
        self._visits: dict[str, DocumentVisit] = {}
        self._current: Document | None = None

        self.registry = TypeRegistry(documents, self.reference_document)
        self.references = ReferenceResolver(documents, self.config, self.add_error)
        self.names = NameResolver(self.config)
        self.composer = ValueSetComposer(self)
        self.walker = StructureWalker(self)

    def resolve(self) -> ResolveResult:
        """Visit every resource definition and everything it references."""
        for document in self.documents.values():
            if not is_resource_definition(document):
                continue

            if is_constrained_type(document):
                logger.warning(f"Skipping constrained type resource definition: {document.filename}")
                continue

            self.reference_document(document)

        logger.debug(f"Resolved {len(self.result.types)} types with {len(self.result.errors)} errors")
        return self.result

    def visit(self, document: Document) -> DocumentVisit:
        """Per-run state of a document."""
        visit = self._visits.get(document.id)
        if visit is None:
            visit = self._visits[document.id] = DocumentVisit()
        return visit

    def add_error(self, message: str) -> None:
        if self._current is not None:
            message = f"{self._current.filename}: {message}"
        self.result.errors.append(message)

    def add_type(self, node: TypeNode) -> None:
        """Append a node to the output, indexing it by name unless the name is taken."""
        if not self.registry.register(node):
            self.add_error(f"Duplicate type name '{node.name}'.")
        self.result.types.append(node)

    def publish(self, document: Document, node: TypeNode) -> None:
        """Attach the node being built to its document so reentrant lookups can see it."""
        self.visit(document).type = node

    def reference_document(self, document: Document) -> TypeNode | None:
        """Process a document and add its node to the output, once."""
        visit = self.visit(document)
        if not visit.referenced:
            visit.referenced = True

            self.process_document(document)

            if visit.type is not None:
                self.add_type(visit.type)

        return visit.type

    def process_document(self, document: Document) -> TypeNode | None:
        """Build the node for a document unless it is processed or being processed."""
        visit = self.visit(document)
        if visit.state is not VisitState.UNVISITED or not document.content:
            return visit.type

        visit.state = VisitState.QUEUED

        previous = self._current
        self._current = document
        logger.debug(f"Processing {document.filename}")

        try:
            match document.category:
                case DocumentCategory.STRUCTURE_DEFINITION:
                    self.walker.process_structure_definition(document)
                case DocumentCategory.VALUE_SET:
                    self.composer.process_value_set(document)
                case DocumentCategory.CODE_SYSTEM:
                    self.composer.process_code_system(document)
                case _:
                    self.add_error(f"Unknown resource type '{document.resource_type}'.")
        except ResolutionError as e:
            # The partially built node is withdrawn
            visit.type = None
            self.add_error(str(e))
        finally:
            visit.state = VisitState.PROCESSED
            self._current = previous

        return visit.type


def resolve(documents: DocumentMap, config: ResolverConfig | None = None) -> ResolveResult:
    """
    Build the type graph for a document map.

    Args:
        documents: Document map keyed by resource id or canonical url
        config: Resolver configuration

    Returns:
        ResolveResult with the ordered types and errors
    """
    return TypeGraphResolver(documents, config).resolve()
