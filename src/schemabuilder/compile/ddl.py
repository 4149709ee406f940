"""SQL DDL generation from a logical schema."""

from datetime import datetime
from typing import List, Optional

from schemabuilder.config.logging import get_logger
from schemabuilder.ir.logical import Column, Schema, Table
from schemabuilder.ir.types import FkNaming
from .dialects import Dialect, get_dialect
from .junction import synthesize
from .keys import ForeignKeyPlacement, index_tables, place_foreign_key
from .resolver import resolve

logger = get_logger(__name__)

INDENT = "    "


def _q(identifier: str) -> str:
    """Bracket-quote an identifier."""
    return f"[{identifier}]"


def render_header(dialect: Dialect, generated_at: datetime) -> str:
    return (
        "-- SQL Schema Generated by schemabuilder\n"
        f"-- Dialect: {dialect.name}\n"
        f"-- Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}"
    )


def render_column(column: Column, dialect: Dialect) -> str:
    """Render one column definition, e.g. ``[email] VARCHAR(255) NOT NULL UNIQUE``."""
    parts = [_q(column.name), dialect.column_type(column.type, column.auto_increment)]
    if column.auto_increment and column.type.upper() == "AUTOINCREMENT" and dialect.autoincrement_marker:
        parts.append(dialect.autoincrement_marker)
    if not column.nullable:
        parts.append("NOT NULL")
    if column.unique and not column.primary_key:
        parts.append("UNIQUE")
    return " ".join(parts)


def _primary_key_constraint(table: Table) -> Optional[str]:
    pk_columns = [c for c in table.columns if c.primary_key]
    if not pk_columns:
        return None
    cols = ", ".join(_q(c.name) for c in pk_columns)
    return f"CONSTRAINT {_q('PK_' + table.name)} PRIMARY KEY ({cols})"


def _create_table(table: Table, dialect: Dialect, constraints: List[str]) -> str:
    lines = [render_column(c, dialect) for c in table.columns]
    pk = _primary_key_constraint(table)
    if pk:
        lines.append(pk)
    lines.extend(constraints)
    body = ",\n".join(f"{INDENT}{line}" for line in lines)
    return f"CREATE TABLE {_q(table.name)} (\n{body}\n);"


def render_create_table(table: Table, dialect: Dialect) -> str:
    """Render CREATE TABLE with an inline PRIMARY KEY constraint over every key column."""
    return _create_table(table, dialect, [])


def render_junction_table(junction: Table, dialect: Dialect) -> str:
    """Render a junction table, including inline FOREIGN KEY constraints from its FK markers."""
    constraints = [
        f"CONSTRAINT {_q(f'FK_{junction.name}_{c.references_table}')} "
        f"FOREIGN KEY ({_q(c.name)}) "
        f"REFERENCES {_q(c.references_table)}({_q(c.references_column)})"
        for c in junction.columns
        if c.is_foreign_key and c.references_table and c.references_column
    ]
    return _create_table(junction, dialect, constraints)


def render_foreign_key(placement: ForeignKeyPlacement) -> str:
    """Render the ALTER TABLE statement for a placed foreign key."""
    relationship = placement.relationship
    fk_table = placement.fk_table.name
    referenced = placement.referenced_table.name
    lines = [
        f"ALTER TABLE {_q(fk_table)}",
        f"{INDENT}ADD CONSTRAINT {_q(f'FK_{fk_table}_{referenced}')} FOREIGN KEY ({_q(placement.column_name)})",
        f"{INDENT}REFERENCES {_q(referenced)}({_q(placement.referenced_column.name)})",
    ]
    if relationship.on_delete != "NO ACTION":
        lines.append(f"{INDENT}ON DELETE {relationship.on_delete}")
    if relationship.on_update != "NO ACTION":
        lines.append(f"{INDENT}ON UPDATE {relationship.on_update}")
    return "\n".join(lines) + ";"


def generate_sql(
    schema: Schema,
    dialect: str = "ACCESS",
    generated_at: Optional[datetime] = None,
    naming: FkNaming = "bare",
) -> str:
    """
    Generate the complete DDL script for a schema.

    Order: header, one junction table per N:M relationship, one CREATE TABLE
    per table (with resolved FK columns), one ALTER TABLE per placeable
    non-N:M relationship. Relationships that cannot be compiled are left
    out; this function does not raise on incomplete schemas.

    Args:
        schema: Schema snapshot
        dialect: SQL dialect name (ACCESS, SQLITE, MYSQL, POSTGRESQL)
        generated_at: Timestamp for the header (defaults to now)
        naming: FK column naming policy

    Returns:
        SQL script text
    """
    profile = get_dialect(dialect)
    statements: List[str] = [render_header(profile, generated_at or datetime.now())]

    many_to_many = [r for r in schema.relationships if r.cardinality == "N:M"]
    others = [r for r in schema.relationships if r.cardinality != "N:M"]

    junction_count = 0
    for relationship in many_to_many:
        junction = synthesize(relationship, schema.tables, naming)
        if junction is not None:
            statements.append(render_junction_table(junction, profile))
            junction_count += 1

    resolved = resolve(schema.model_copy(update={"relationships": others}), naming)
    for table in resolved.tables:
        statements.append(render_create_table(table, profile))

    index = index_tables(resolved.tables)
    fk_count = 0
    for relationship in others:
        placement = place_foreign_key(relationship, index, naming)
        if placement is not None:
            statements.append(render_foreign_key(placement))
            fk_count += 1

    logger.info(
        f"Generated {profile.name} DDL: {junction_count} junction table(s), "
        f"{len(resolved.tables)} table(s), {fk_count} foreign key(s)"
    )
    return "\n\n".join(statements) + "\n"
