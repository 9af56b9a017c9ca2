"""
Loader module.

Discovers and parses specification files into a document map.
"""

from __future__ import annotations

from .reader import LoadResult, SpecificationReader, read_specification

__all__ = [
    "LoadResult",
    "SpecificationReader",
    "read_specification",
]
