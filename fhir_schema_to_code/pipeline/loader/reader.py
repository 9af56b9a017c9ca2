"""
Reads a directory of FHIR specification files into a document map.

Only ValueSet, CodeSystem and profile StructureDefinition files are kept.
Value sets and code systems are keyed by canonical url, structure
definitions by resource id.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from ...exceptions import DocumentLoadError
from ..config import LoaderConfig
from ..documents import Document, DocumentCategory, DocumentMap, document_category


@dataclass
class LoadResult:
    """Documents read from disk and the errors met while reading them."""

    documents: DocumentMap = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)


class SpecificationReader:
    """Builds a document map from specification files."""

    def __init__(self, config: LoaderConfig | None = None):
        self.config = config or LoaderConfig()

    def read(self, base_path: str | Path) -> LoadResult:
        """
        Read every JSON file below base_path.

        Args:
            base_path: Root directory of the specification

        Returns:
            LoadResult with the document map and the errors
        """
        result = LoadResult()
        base_path = Path(base_path)

        if not base_path.is_dir():
            result.errors.append(f"Error reading directory '{base_path}': not a directory.")
            return result

        for path in sorted(base_path.rglob("*.json")):
            if any(path.name.endswith(suffix) for suffix in self.config.skip_suffixes):
                continue

            try:
                self.add_file(result.documents, str(path), self.read_file(path))
            except DocumentLoadError as e:
                result.errors.append(str(e))

        logger.info(f"Read {len(result.documents)} documents from '{base_path}'")
        return result

    @staticmethod
    def read_file(path: Path) -> Any:
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise DocumentLoadError(str(path), str(e)) from e

    def add_file(self, documents: DocumentMap, filename: str, content: Any) -> Document | None:
        """Register a parsed file in the map. Returns None when the file is not relevant."""
        if not isinstance(content, dict):
            return None

        category = document_category(content)
        if category is None:
            return None

        if category is DocumentCategory.STRUCTURE_DEFINITION and self.config.profile_marker not in Path(filename).name:
            logger.debug(f"Skipping structure definition outside a profile file: {filename}")
            return None

        document_id = self.content_id(category, content)
        if not document_id:
            return None

        existing = documents.get(document_id)
        if existing is not None:
            raise DocumentLoadError(filename, f"Duplicate id '{document_id}' already defined in file '{existing.filename}'.")

        document = Document(id=document_id, filename=filename, content=content)
        documents[document_id] = document
        return document

    @staticmethod
    def content_id(category: DocumentCategory, content: dict[str, Any]) -> str | None:
        if category in (DocumentCategory.VALUE_SET, DocumentCategory.CODE_SYSTEM):
            return content.get("url")
        return content.get("id")


def read_specification(base_path: str | Path, config: LoaderConfig | None = None) -> LoadResult:
    """Read the specification files below base_path into a document map."""
    return SpecificationReader(config).read(base_path)
