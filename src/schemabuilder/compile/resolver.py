"""Foreign key resolution for 1:1, 1:N and N:1 relationships."""

from typing import List

from schemabuilder.config.logging import get_logger
from schemabuilder.ir.logical import Schema, Table
from schemabuilder.ir.types import FkNaming
from .keys import build_fk_column, index_tables, place_foreign_key

logger = get_logger(__name__)


def resolve(schema: Schema, naming: FkNaming = "bare") -> Schema:
    """
    Add the foreign key column each non-N:M relationship implies.

    Relationships that cannot be placed (missing table, missing primary key,
    dangling column id, 1:1 with both sides required) are skipped. A column
    is only added when the destination table has no column of that name yet,
    so resolving an already resolved schema changes nothing.

    Args:
        schema: Schema snapshot; it is not modified
        naming: FK column naming policy

    Returns:
        New Schema with FK columns appended to the receiving tables
    """
    tables: List[Table] = [t.model_copy(update={"columns": list(t.columns)}) for t in schema.tables]
    positions = {}
    for i, table in enumerate(tables):
        positions.setdefault(table.id, i)
    index = index_tables(tables)

    added = 0
    for relationship in schema.relationships:
        placement = place_foreign_key(relationship, index, naming)
        if placement is None:
            continue

        destination = index[placement.fk_table.id]
        if destination.has_column_named(placement.column_name):
            continue

        updated = destination.model_copy(
            update={"columns": [*destination.columns, build_fk_column(placement)]}
        )
        tables[positions[destination.id]] = updated
        index[destination.id] = updated
        added += 1

    logger.debug(f"Resolved {len(schema.relationships)} relationship(s), added {added} FK column(s)")
    return schema.model_copy(update={"tables": tables, "relationships": list(schema.relationships)})
