"""Primary key lookup, foreign key placement and FK column naming.

The resolver, the ALTER TABLE renderer, the junction synthesizer and the
connection-time editing path all place and name foreign keys through this
module, so a relationship compiles to the same column whichever path built it.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from schemabuilder.config.logging import get_logger
from schemabuilder.ir.logical import Column, Relationship, Table
from schemabuilder.ir.types import FkNaming

logger = get_logger(__name__)


@dataclass(frozen=True)
class ForeignKeyPlacement:
    """Where a relationship's foreign key lives and what it points at."""

    relationship: Relationship
    fk_table: Table  # table that holds the FK column
    referenced_table: Table  # table whose primary key is copied
    referenced_column: Column  # that primary key
    column_name: str


def index_tables(tables: Iterable[Table]) -> Dict[str, Table]:
    """Map table id to table, keeping the first table when ids repeat."""
    index: Dict[str, Table] = {}
    for table in tables:
        index.setdefault(table.id, table)
    return index


def fk_column_name(referenced_table: Table, primary_key: Column, naming: FkNaming = "bare") -> str:
    """Name of a column that stores a reference to ``primary_key``."""
    if naming == "prefixed":
        return f"{referenced_table.name}_{primary_key.name}"
    return primary_key.name


def place_foreign_key(
    relationship: Relationship,
    tables: Dict[str, Table],
    naming: FkNaming = "bare",
) -> Optional[ForeignKeyPlacement]:
    """
    Decide which table of a non-N:M relationship receives the foreign key.

    1:N puts it on the target, N:1 on the source. 1:1 follows the optional
    side (target first); a 1:1 with both sides required is ambiguous and
    gets no foreign key.

    Args:
        relationship: Relationship to place
        tables: Tables indexed by id (see index_tables)
        naming: FK column naming policy

    Returns:
        The placement, or None when the relationship cannot be placed
    """
    if relationship.cardinality == "N:M":
        return None

    source = tables.get(relationship.source_table_id)
    target = tables.get(relationship.target_table_id)
    if source is None or target is None:
        logger.debug(f"Relationship {relationship.id}: endpoint table missing, skipped")
        return None

    if source.column(relationship.source_column_id) is None or target.column(relationship.target_column_id) is None:
        logger.debug(f"Relationship {relationship.id}: column reference no longer resolves, skipped")
        return None

    source_pk = source.primary_key
    target_pk = target.primary_key
    if source_pk is None or target_pk is None:
        logger.debug(f"Relationship {relationship.id}: endpoint without primary key, skipped")
        return None

    if relationship.cardinality == "1:N":
        fk_table, referenced_table, referenced_column = target, source, source_pk
    elif relationship.cardinality == "N:1":
        fk_table, referenced_table, referenced_column = source, target, target_pk
    elif relationship.target_optional:
        fk_table, referenced_table, referenced_column = target, source, source_pk
    elif relationship.source_optional:
        fk_table, referenced_table, referenced_column = source, target, target_pk
    else:
        logger.debug(f"Relationship {relationship.id}: 1:1 with both sides required, no FK placed")
        return None

    return ForeignKeyPlacement(
        relationship=relationship,
        fk_table=fk_table,
        referenced_table=referenced_table,
        referenced_column=referenced_column,
        column_name=fk_column_name(referenced_table, referenced_column, naming),
    )


def build_fk_column(placement: ForeignKeyPlacement) -> Column:
    """Create the FK column for a placement; its type is the referenced key's type as-is."""
    relationship = placement.relationship
    return Column(
        id=f"fk-{relationship.id}-{placement.fk_table.id}",
        name=placement.column_name,
        type=placement.referenced_column.type,
        primary_key=False,
        nullable=relationship.source_optional or relationship.target_optional,
        unique=relationship.cardinality == "1:1",
        auto_increment=False,
        is_foreign_key=True,
        references_table=placement.referenced_table.name,
        references_column=placement.referenced_column.name,
    )
