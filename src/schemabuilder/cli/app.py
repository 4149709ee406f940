"""Typer CLI application."""

from pathlib import Path
from typing import Optional

import typer

from schemabuilder.advisory.engine import analyze as run_analysis
from schemabuilder.compile.ddl import generate_sql
from schemabuilder.config.logging import setup_logging
from schemabuilder.config.settings import get_settings
from schemabuilder.convert.modes import conceptual_to_schema, schema_to_conceptual
from schemabuilder.utils.ir_io import (
    load_conceptual_from_json,
    load_schema_from_json,
    save_conceptual_to_json,
    save_schema_to_json,
)

app = typer.Typer(help="schemabuilder: relational schema graphs to SQL DDL")

SEVERITY_ORDER = ("high", "medium", "low", "info")


def _load_or_exit(loader, path: Path):
    try:
        return loader(path)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def generate(
    schema_json: Path,
    dialect: Optional[str] = typer.Option(None, "--dialect", "-d", help="ACCESS, SQLITE, MYSQL or POSTGRESQL"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write the DDL to this file"),
):
    """
    Generate SQL DDL from a schema JSON file.

    Args:
        schema_json: Path to a schema or editor export JSON file
        dialect: SQL dialect (defaults to the configured dialect)
        out: Optional output file; DDL goes to stdout otherwise
    """
    setup_logging()
    settings = get_settings()

    schema = _load_or_exit(load_schema_from_json, schema_json)
    sql = generate_sql(schema, dialect or settings.default_dialect, naming=settings.fk_naming)

    if out is None:
        typer.echo(sql, nl=False)
        return

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(sql, encoding="utf-8")
    typer.echo(f"✓ DDL written to {out}", err=True)


@app.command()
def analyze(
    schema_json: Path,
    mode: str = typer.Option("LOGICAL", "--mode", "-m", help="LOGICAL or CONCEPTUAL"),
):
    """
    Print validation issues and recommendations for a schema.

    Args:
        schema_json: Path to a schema JSON file (conceptual in CONCEPTUAL mode)
        mode: Analysis mode
    """
    setup_logging()
    mode = mode.upper()
    if mode not in ("LOGICAL", "CONCEPTUAL"):
        typer.echo(f"Error: unknown mode '{mode}'", err=True)
        raise typer.Exit(1)

    loader = load_schema_from_json if mode == "LOGICAL" else load_conceptual_from_json
    schema = _load_or_exit(loader, schema_json)
    report = run_analysis(schema, mode)

    for heading, findings in (("Issues", report.issues), ("Recommendations", report.recommendations)):
        typer.echo(f"{heading}: {len(findings)}")
        for finding in sorted(findings, key=lambda f: SEVERITY_ORDER.index(f.severity)):
            typer.echo(f"  [{finding.severity.upper()}] {finding.title}: {finding.description}")
            if finding.action is not None:
                typer.echo(f"      -> {finding.action.label} ({finding.action.kind})")

    if not report.findings:
        typer.echo("✓ No issues or recommendations")


@app.command()
def convert(
    schema_json: Path,
    out_json: Path,
    to: str = typer.Option(..., "--to", help="conceptual or logical"),
):
    """
    Convert a schema between logical and conceptual modes.

    Args:
        schema_json: Input schema JSON (logical when converting to conceptual)
        out_json: Output path for the converted schema
        to: Target mode
    """
    setup_logging()
    settings = get_settings()
    target = to.lower()

    if target == "conceptual":
        converted = schema_to_conceptual(_load_or_exit(load_schema_from_json, schema_json))
        save_conceptual_to_json(converted, out_json)
        summary = f"{len(converted.entities)} entities"
    elif target == "logical":
        converted = conceptual_to_schema(
            _load_or_exit(load_conceptual_from_json, schema_json),
            on_delete=settings.default_on_delete,
            on_update=settings.default_on_update,
        )
        save_schema_to_json(converted, out_json)
        summary = f"{len(converted.tables)} tables"
    else:
        typer.echo(f"Error: unknown target mode '{to}'", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Wrote {summary} to {out_json}")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
