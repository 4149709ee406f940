"""Relationship creation and table removal as driven by the editing layer."""

import uuid
from typing import Optional

from schemabuilder.compile.keys import build_fk_column, index_tables, place_foreign_key
from schemabuilder.config.logging import get_logger
from schemabuilder.config.settings import get_settings
from schemabuilder.ir.logical import Relationship, Schema
from schemabuilder.ir.types import Cardinality, FkNaming

logger = get_logger(__name__)


def connect_tables(
    schema: Schema,
    source_table_id: str,
    source_column_id: str,
    target_table_id: str,
    target_column_id: str,
    cardinality: Optional[Cardinality] = None,
    relationship_id: Optional[str] = None,
    naming: Optional[FkNaming] = None,
) -> Schema:
    """
    Add a relationship between two table columns.

    Unless given, cardinality, referential actions and the FK naming policy
    come from settings; both sides start as required. The FK column is
    placed and named exactly as resolve() would place it, and is added
    right away unless a column of that name already exists.

    Args:
        schema: Schema snapshot; it is not modified
        source_table_id: Table the connection starts from
        source_column_id: Column the connection starts from
        target_table_id: Table the connection ends at
        target_column_id: Column the connection ends at
        cardinality: Relationship cardinality (default from settings)
        relationship_id: Id for the new relationship (generated if omitted)
        naming: FK column naming policy (default from settings)

    Returns:
        New Schema with the relationship, or the input schema when either
        table does not exist
    """
    settings = get_settings()
    index = index_tables(schema.tables)
    if source_table_id not in index or target_table_id not in index:
        logger.warning(f"Cannot connect {source_table_id} -> {target_table_id}: table not found")
        return schema

    relationship = Relationship(
        id=relationship_id or f"rel-{uuid.uuid4().hex[:12]}",
        source_table_id=source_table_id,
        source_column_id=source_column_id,
        target_table_id=target_table_id,
        target_column_id=target_column_id,
        cardinality=cardinality or settings.default_cardinality,
        source_optional=False,
        target_optional=False,
        on_delete=settings.default_on_delete,
        on_update=settings.default_on_update,
    )

    tables = list(schema.tables)
    placement = place_foreign_key(relationship, index, naming or settings.fk_naming)
    if placement is not None and not placement.fk_table.has_column_named(placement.column_name):
        position = next(i for i, t in enumerate(tables) if t.id == placement.fk_table.id)
        destination = tables[position]
        tables[position] = destination.model_copy(
            update={"columns": [*destination.columns, build_fk_column(placement)]}
        )
        logger.debug(f"Added FK column '{placement.column_name}' to table '{destination.name}'")

    return schema.model_copy(
        update={"tables": tables, "relationships": [*schema.relationships, relationship]}
    )


def delete_table(schema: Schema, table_id: str) -> Schema:
    """Remove a table and every relationship that touches it."""
    return schema.model_copy(
        update={
            "tables": [t for t in schema.tables if t.id != table_id],
            "relationships": [
                r
                for r in schema.relationships
                if r.source_table_id != table_id and r.target_table_id != table_id
            ],
        }
    )
