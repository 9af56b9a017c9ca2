"""
Configuration for the loader and the type graph resolver.

Every option has a default matching the published FHIR specification
layout, so an empty config file is valid.
"""

from __future__ import annotations

from dataclasses import dataclass, field


def _default_value_set_url_rewrites() -> dict[str, str]:
    # devicerequest.profile.json binds to the HTML page instead of the canonical url
    return {
        "http://build.fhir.org/valueset-request-intent.html": "http://hl7.org/fhir/ValueSet/request-intent",
    }


@dataclass
class ResolverConfig:
    """Options for building the type graph."""

    # Enum member names derived from display or description must be shorter than this
    max_name_length: int = 56

    # Prefix of profile uris naming a base type or resource
    profile_base_url: str = "http://hl7.org/fhir/StructureDefinition/"

    # Value sets carrying this copyright are treated as example bindings
    example_value_set_copyright: str = "This is an example set"

    # Known bad value set urls and their canonical counterparts
    value_set_url_rewrites: dict[str, str] = field(default_factory=_default_value_set_url_rewrites)

    # Extension holding a concept definition when the concept has none
    value_set_definition_extension: str = "http://hl7.org/fhir/StructureDefinition/valueset-definition"

    @staticmethod
    def from_dict(d: dict) -> ResolverConfig:
        """Create a config from a dictionary."""
        config = ResolverConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "max_name_length": self.max_name_length,
            "profile_base_url": self.profile_base_url,
            "example_value_set_copyright": self.example_value_set_copyright,
            "value_set_url_rewrites": dict(self.value_set_url_rewrites),
            "value_set_definition_extension": self.value_set_definition_extension,
        }


@dataclass
class LoaderConfig:
    """Options for discovering specification files."""

    # Files ending with one of these are alternate renderings and are skipped
    skip_suffixes: list[str] = field(default_factory=lambda: [".canonical.json", ".diff.json"])

    # StructureDefinitions are only read from files whose name contains this marker
    profile_marker: str = ".profile"

    @staticmethod
    def from_dict(d: dict) -> LoaderConfig:
        """Create a config from a dictionary."""
        config = LoaderConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "skip_suffixes": list(self.skip_suffixes),
            "profile_marker": self.profile_marker,
        }


@dataclass
class GeneratorConfig:
    """Top-level configuration read by the command line tool."""

    resolver: ResolverConfig = field(default_factory=ResolverConfig)

    loader: LoaderConfig = field(default_factory=LoaderConfig)

    # Minimum loguru level
    log_level: str = "INFO"

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "resolver" and isinstance(v, dict):
                config.resolver = ResolverConfig.from_dict(v)
            elif k == "loader" and isinstance(v, dict):
                config.loader = LoaderConfig.from_dict(v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "resolver": self.resolver.to_dict(),
            "loader": self.loader.to_dict(),
            "log_level": self.log_level,
        }
