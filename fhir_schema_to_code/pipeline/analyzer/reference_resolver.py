"""
Reference resolver for the informal links between specification documents.

Profile uris, value set canonical urls and binding references are spelled
inconsistently across the specification; this module holds the tolerant
lookups used to turn them into documents or type names.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..config import ResolverConfig
from ..documents import Document, DocumentMap


class ReferenceResolver:
    """Resolves profile uris and value set urls against the document map."""

    def __init__(self, documents: DocumentMap, config: ResolverConfig, report: Callable[[str], None]):
        """
        Initialize the resolver.

        Args:
            documents: The document map of the current run
            config: Resolver configuration
            report: Callback recording a non-fatal error
        """
        self.documents = documents
        self.config = config
        self._report = report

    def resource_name_from_profile(self, profile: str) -> str | None:
        """
        Extract the type or resource name from a profile uri.

        e.g. "http://hl7.org/fhir/StructureDefinition/DomainResource" -> "DomainResource"
        """
        base = self.config.profile_base_url
        if base not in profile:
            self._report(f"Unrecognized profile uri: '{profile}'.")
            return None
        return profile[profile.index(base) + len(base) :]

    def value_set_document(self, url: str) -> Document | None:
        """Find the ValueSet or CodeSystem document for a canonical url."""
        url = self.config.value_set_url_rewrites.get(url, url)

        document = self.documents.get(url)
        if document is None:
            # Some references omit the 'vs' segment: .../ValueSet/vs/name
            parts = url.split("/")
            parts.insert(len(parts) - 1, "vs")
            document = self.documents.get("/".join(parts))

        return document

    def is_apparent_example(self, document: Document) -> bool:
        """Whether a value set looks like an example even if its binding does not say so."""
        return bool(document.content) and document.content.get("copyright") == self.config.example_value_set_copyright

    @staticmethod
    def binding_target(binding: dict[str, Any]) -> str | None:
        """Return the value set url a binding points at, if any."""
        reference = binding.get("valueSetReference")
        if isinstance(reference, dict) and reference.get("reference"):
            target = reference["reference"]
        else:
            target = binding.get("valueSet") or binding.get("valueSetUri")

        if not isinstance(target, str) or not target:
            return None

        # Canonical references may pin a version: url|4.0.1
        return target.split("|", 1)[0]

    @staticmethod
    def type_profile(type_element: dict[str, Any]) -> str | None:
        """Return the first profile declared on an element type option."""
        for key in ("profile", "targetProfile"):
            profile = type_element.get(key)
            if isinstance(profile, list):
                profile = profile[0] if profile else None
            if profile:
                return profile
        return None
