"""
Name-keyed store of resolved type nodes.

One registry is created per resolver run. A miss on ``lookup`` triggers the
resolution of the document carrying the same id, so callers can ask for a
type by name without caring whether it has been visited yet.
"""

from __future__ import annotations

from collections.abc import Callable

from ..documents import Document, DocumentMap
from .type_nodes import TypeNode


class TypeRegistry:
    """Maps type names to nodes, refusing duplicates."""

    def __init__(self, documents: DocumentMap, reference_document: Callable[[Document], TypeNode | None]):
        """
        Initialize the registry.

        Args:
            documents: The document map of the current run
            reference_document: Callback visiting a document and returning its node
        """
        self.documents = documents
        self._reference_document = reference_document
        self._types_by_name: dict[str, TypeNode] = {}

    def register(self, node: TypeNode) -> bool:
        """Index a node by name. Returns False if the name is already taken."""
        name = getattr(node, "name", None)
        if not name:
            return True
        if name in self._types_by_name:
            return False
        self._types_by_name[name] = node
        return True

    def get(self, name: str | None) -> TypeNode | None:
        """Return the node registered under name, without triggering resolution."""
        if not name:
            return None
        return self._types_by_name.get(name)

    def lookup(self, name: str | None) -> TypeNode | None:
        """Return the node for name, resolving the matching document if needed."""
        if not name:
            return None

        node = self._types_by_name.get(name)
        if node is None:
            document = self.documents.get(name)
            if document is not None:
                node = self._reference_document(document)
        return node
