import json
import sys
from collections import Counter

import click
from loguru import logger

from .logging_config import setup_logging
from .pipeline import GeneratorConfig, read_specification, resolve


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every document visit")
@click.argument("path", type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.argument("output", required=False, default=None, type=click.Path(resolve_path=True))
def fhir_schema_to_code(config, verbose, path, output):
    """Resolve the FHIR specification in PATH into a type graph, optionally dumped as JSON to OUTPUT."""
    if config is not None:
        with open(config) as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    setup_logging("DEBUG" if verbose else config.log_level)

    loaded = read_specification(path, config.loader)
    result = resolve(loaded.documents, config.resolver)

    categories = Counter(node.category.value for node in result.types)
    summary = ", ".join(f"{count} {category}" for category, count in sorted(categories.items()))
    logger.info(f"Resolved {len(result.types)} types ({summary or 'none'})")

    errors = loaded.errors + result.errors
    for error in errors:
        click.echo(error, err=True)

    if output is not None:
        dump = result.to_dict()
        dump["errors"] = errors
        with open(output, "w") as f:
            json.dump(dump, f, indent=2)

    if errors:
        logger.error(f"{len(errors)} errors")
        sys.exit(1)
