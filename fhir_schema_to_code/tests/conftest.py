"""
Shared fixtures: a builder for small in-memory FHIR specifications.
"""

from __future__ import annotations

from typing import Any

import pytest

from fhir_schema_to_code.pipeline.documents import Document, DocumentMap

PROFILE_BASE = "http://hl7.org/fhir/StructureDefinition/"


class DefinitionBuilder:
    """Accumulates specification documents in insertion order."""

    def __init__(self):
        self.documents: DocumentMap = {}

    def add(self, content: dict[str, Any], filename: str | None = None) -> Document:
        if content["resourceType"] in ("ValueSet", "CodeSystem"):
            document_id = content["url"]
        else:
            document_id = content["id"]

        if filename is None:
            filename = f"{document_id.split('/')[-1].lower()}.profile.json"

        document = Document(id=document_id, filename=filename, content=content)
        self.documents[document_id] = document
        return document

    @staticmethod
    def element(path: str, *type_codes: str, min: int = 0, max: str = "1", short: str | None = None, **extra) -> dict:
        data: dict[str, Any] = {"path": path, "min": min, "max": max}
        if short is not None:
            data["short"] = short
        if type_codes:
            data["type"] = [{"code": code} for code in type_codes]
        data.update(extra)
        return data

    def structure(
        self,
        type_id: str,
        elements: list[dict] = (),
        kind: str = "complex-type",
        base: str | None = None,
        derivation: str | None = None,
        short: str | None = None,
    ) -> Document:
        content: dict[str, Any] = {
            "resourceType": "StructureDefinition",
            "id": type_id,
            "kind": kind,
            "differential": {"element": [{"path": type_id, "short": short or f"{type_id} definition"}, *elements]},
        }
        if base is not None:
            content["baseDefinition"] = PROFILE_BASE + base
        if derivation is not None:
            content["derivation"] = derivation
        return self.add(content)

    def primitive(self, type_id: str) -> Document:
        return self.add(
            {
                "resourceType": "StructureDefinition",
                "id": type_id,
                "kind": "primitive-type",
                "differential": {
                    "element": [
                        {
                            "path": type_id,
                            "short": f"Primitive Type {type_id}",
                            "definition": f"The {type_id} primitive.",
                        },
                        {"path": f"{type_id}.value", "short": f"Primitive value for {type_id}"},
                    ]
                },
            }
        )

    def data_type(self, type_id: str, elements: list[dict] = (), base: str | None = "Element", **kwargs) -> Document:
        return self.structure(type_id, elements, kind="complex-type", base=base, **kwargs)

    def resource(self, type_id: str, elements: list[dict] = (), base: str | None = "DomainResource", **kwargs) -> Document:
        return self.structure(type_id, elements, kind="resource", base=base, **kwargs)

    def code_system(self, url: str, concepts: list[dict], name: str | None = None, case_sensitive: bool = True) -> Document:
        content: dict[str, Any] = {
            "resourceType": "CodeSystem",
            "url": url,
            "caseSensitive": case_sensitive,
            "concept": concepts,
        }
        if name is not None:
            content["name"] = name
        return self.add(content, filename=f"codesystem-{url.split('/')[-1]}.json")

    def value_set(self, url: str, includes: list[dict], name: str | None = None, **extra) -> Document:
        content: dict[str, Any] = {
            "resourceType": "ValueSet",
            "url": url,
            "compose": {"include": includes},
        }
        if name is not None:
            content["name"] = name
        content.update(extra)
        return self.add(content, filename=f"valueset-{url.split('/')[-1]}.json")

    def core(self) -> DefinitionBuilder:
        """Minimal base types most resources need."""
        e = self.element
        for type_id in ("string", "code", "boolean", "decimal", "integer", "uri", "dateTime"):
            self.primitive(type_id)

        self.structure("Element", [e("Element.id", "string")], short="Base for all elements")
        self.data_type("BackboneElement")
        self.structure("Resource", [e("Resource.id", "string")], kind="resource")
        self.resource("DomainResource", base="Resource")
        self.data_type("Quantity", [e("Quantity.value", "decimal"), e("Quantity.unit", "string")])
        self.data_type("Coding", [e("Coding.system", "uri"), e("Coding.code", "code")])
        self.data_type("CodeableConcept", [e("CodeableConcept.coding", "Coding", max="*"), e("CodeableConcept.text", "string")])
        self.data_type("Reference", [e("Reference.reference", "string")])
        return self


@pytest.fixture
def defs() -> DefinitionBuilder:
    return DefinitionBuilder()


@pytest.fixture
def core_defs() -> DefinitionBuilder:
    return DefinitionBuilder().core()
