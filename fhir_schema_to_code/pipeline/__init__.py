"""
Pipeline - FHIR specification to type graph.

1. Phase 1 (Loader): Read specification files into a document map
2. Phase 2 (Analyzer): Resolve references and build the ordered type graph

Rendering the graph into declarations is left to the caller.
"""

from __future__ import annotations

from .analyzer import ResolveResult, TypeGraphResolver, resolve
from .config import GeneratorConfig, LoaderConfig, ResolverConfig
from .documents import Document, DocumentCategory, DocumentMap, VisitState
from .loader import LoadResult, read_specification

__all__ = [
    "Document",
    "DocumentCategory",
    "DocumentMap",
    "GeneratorConfig",
    "LoadResult",
    "LoaderConfig",
    "ResolveResult",
    "ResolverConfig",
    "TypeGraphResolver",
    "VisitState",
    "read_specification",
    "resolve",
]
