"""Command-line interface for modelgen."""

import json
import sys
from pathlib import Path

import click

from .config.logging import get_logger, setup_logging
from .config.settings import get_settings
from .output.formatter import artifacts_dict, format_artifacts, format_resolution_result
from .resolver.pipeline import ResolvedModel, resolve_model, run_passes
from .schema.errors import ModelError, SchemaLoadError, SchemaValidationError
from .schema.loader import parse_model
from .schema.models import Model

logger = get_logger(__name__)


def _load(model_file: str) -> Model:
    """Parse a model file, exiting with status 2 on load errors."""
    try:
        return parse_model(model_file)
    except SchemaLoadError as e:
        logger.error("Failed to load %s: %s", model_file, e)
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)
    except SchemaValidationError as e:
        logger.error("Invalid model document %s: %s", model_file, e)
        click.echo(f"Schema validation error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
        sys.exit(2)


def _resolve(model_file: str) -> ResolvedModel:
    """Parse and resolve a model file, exiting with status 1 on model errors."""
    model = _load(model_file)
    try:
        return resolve_model(model)
    except ModelError as e:
        click.echo(f"Model error: {e}", err=True)
        for issue in e.issues:
            click.echo(f"  - {issue}", err=True)
        sys.exit(1)


@click.group()
@click.version_option()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (defaults to MODELGEN_LOG_LEVEL)",
)
def main(log_level: str | None):
    """modelgen: derive storage, wire and runtime artifacts from a data model."""
    setup_logging(level=log_level)


@main.command()
@click.argument("model_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def validate(model_file: str, output_format: str, strict: bool):
    """Validate a model file.

    MODEL_FILE is the path to a YAML or JSON model file.

    Exit codes:
      0 - Model is valid
      1 - Model is invalid (errors found)
      2 - File or schema error
    """
    model = _load(model_file)
    result = run_passes(model)

    output = format_resolution_result(result, output_format)  # type: ignore
    click.echo(output)

    if result.has_errors:
        sys.exit(1)
    elif strict and result.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


@main.command()
@click.argument("model_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--db",
    type=click.Choice(["sqlite3", "postgres"]),
    default=None,
    help="SQL dialect of the storage statements (defaults to MODELGEN_DB)",
)
def plan(model_file: str, output_format: str, db: str | None):
    """Print the artifact groups synthesized for every entity.

    MODEL_FILE is the path to a YAML or JSON model file.

    Exit codes:
      0 - Success
      1 - Model errors
      2 - File or schema error
    """
    from .synth.synthesizer import synthesize

    resolved = _resolve(model_file)
    synthesis = synthesize(resolved, db or get_settings().db)

    click.echo(format_artifacts(synthesis, output_format))  # type: ignore
    sys.exit(0)


@main.command()
@click.option(
    "--model",
    "model_file",
    required=True,
    type=click.Path(exists=True),
    help="Path to the YAML or JSON model file",
)
@click.option(
    "--output",
    "output_dir",
    default=None,
    type=click.Path(file_okay=False),
    help="Output directory (defaults to MODELGEN_OUTPUT_DIR)",
)
@click.option(
    "--db",
    type=click.Choice(["sqlite3", "postgres"]),
    default=None,
    help="SQL dialect (defaults to MODELGEN_DB)",
)
@click.option(
    "--metrics/--no-metrics",
    default=None,
    help="Also write the metrics exposition (defaults to MODELGEN_METRICS)",
)
def generate(model_file: str, output_dir: str | None, db: str | None, metrics: bool | None):
    """Generate every artifact of a model into an output directory.

    Writes schema.sql, schema.graphql, model.dot and artifacts.json, plus
    metrics.prom with --metrics.

    Exit codes:
      0 - Success
      1 - Model errors
      2 - File, schema or output error
    """
    from .graph.builder import build_graph
    from .render import render_diagram, render_sdl, render_sql
    from .runtime.metrics import MetricsRegistry
    from .synth.synthesizer import synthesize

    settings = get_settings()
    dialect = db or settings.db
    with_metrics = settings.metrics if metrics is None else metrics

    out = output_dir or settings.output_dir
    if out is None:
        click.echo("Error: no output directory (use --output or MODELGEN_OUTPUT_DIR)", err=True)
        sys.exit(2)
    out_path = Path(out)

    resolved = _resolve(model_file)
    synthesis = synthesize(resolved, dialect)

    files = {
        "schema.sql": render_sql(resolved, dialect),
        "schema.graphql": render_sdl(resolved, synthesis),
        "model.dot": render_diagram(build_graph(resolved)),
        "artifacts.json": json.dumps(artifacts_dict(synthesis), indent=2) + "\n",
    }
    if with_metrics:
        registry = MetricsRegistry()
        registry.register_all(synthesis)
        files["metrics.prom"] = registry.exposition()

    try:
        out_path.mkdir(parents=True, exist_ok=True)
        for filename, content in files.items():
            file_path = out_path / filename
            file_path.write_text(content, encoding="utf-8")
            click.echo(f"Generated: {file_path}")
    except OSError as e:
        logger.error("Failed to write artifacts to %s: %s", out_path, e)
        click.echo(f"Error writing output: {e}", err=True)
        sys.exit(2)

    for issue in resolved.result.warnings:
        click.echo(f"  {issue}", err=True)

    click.echo(
        f"\nGenerated {len(files)} files for {len(resolved.entities)} entities "
        f"({synthesis.total_groups} operations)"
    )
    sys.exit(0)


if __name__ == "__main__":
    main()
