"""FHIR Schema to Code Generator

Turns FHIR StructureDefinitions, ValueSets and CodeSystems into an ordered,
fully resolved type graph ready for declaration emitters.
"""

__version__ = "1.0.0"

from .pipeline import (
    Document,
    GeneratorConfig,
    LoaderConfig,
    ResolveResult,
    ResolverConfig,
    TypeGraphResolver,
    read_specification,
    resolve,
)

__all__ = [
    "Document",
    "GeneratorConfig",
    "LoaderConfig",
    "ResolveResult",
    "ResolverConfig",
    "TypeGraphResolver",
    "read_specification",
    "resolve",
]
