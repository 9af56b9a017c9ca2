"""Tests for configuration loading."""

from fhir_schema_to_code.pipeline import GeneratorConfig, LoaderConfig, ResolverConfig


def test_defaults():
    config = GeneratorConfig()

    assert config.resolver.max_name_length == 56
    assert config.resolver.profile_base_url == "http://hl7.org/fhir/StructureDefinition/"
    assert config.resolver.value_set_url_rewrites == {
        "http://build.fhir.org/valueset-request-intent.html": "http://hl7.org/fhir/ValueSet/request-intent",
    }
    assert config.loader.skip_suffixes == [".canonical.json", ".diff.json"]
    assert config.log_level == "INFO"


def test_from_dict_nested():
    config = GeneratorConfig.from_dict(
        {
            "resolver": {"max_name_length": 40, "unknown_option": True},
            "loader": {"profile_marker": ".sd"},
            "log_level": "DEBUG",
        }
    )

    assert config.resolver.max_name_length == 40
    assert not hasattr(config.resolver, "unknown_option")
    assert config.resolver.example_value_set_copyright == "This is an example set"
    assert config.loader.profile_marker == ".sd"
    assert config.loader.skip_suffixes == [".canonical.json", ".diff.json"]
    assert config.log_level == "DEBUG"


def test_to_dict_round_trip():
    config = GeneratorConfig(
        resolver=ResolverConfig(max_name_length=30),
        loader=LoaderConfig(skip_suffixes=[".diff.json"]),
    )

    assert GeneratorConfig.from_dict(config.to_dict()) == config


def test_default_rewrites_are_not_shared():
    first = ResolverConfig()
    first.value_set_url_rewrites["http://a"] = "http://b"

    assert "http://a" not in ResolverConfig().value_set_url_rewrites
