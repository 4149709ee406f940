"""Junction tables for many-to-many relationships."""

from typing import List, Optional

from schemabuilder.config.logging import get_logger
from schemabuilder.ir.logical import Column, Relationship, Schema, Table
from schemabuilder.ir.types import FkNaming
from .keys import fk_column_name, index_tables

logger = get_logger(__name__)


def _junction_column(column_id: str, referenced_table: Table, primary_key: Column, naming: FkNaming) -> Column:
    return Column(
        id=column_id,
        name=fk_column_name(referenced_table, primary_key, naming),
        type=primary_key.type,
        primary_key=True,
        nullable=False,
        unique=True,
        auto_increment=False,
        is_foreign_key=True,
        references_table=referenced_table.name,
        references_column=primary_key.name,
    )


def synthesize(
    relationship: Relationship,
    tables: List[Table],
    naming: FkNaming = "bare",
) -> Optional[Table]:
    """
    Build the junction table for one N:M relationship.

    The table is named ``<source>_<target>`` and has exactly two columns,
    one per endpoint primary key (same type), both part of a composite
    primary key in (source, target) order. Each column carries FK markers
    pointing at the primary key it was copied from.

    Args:
        relationship: An N:M relationship
        tables: Tables of the schema the relationship belongs to
        naming: FK column naming policy

    Returns:
        The junction table, or None when the relationship is not N:M or an
        endpoint is missing or has no primary key
    """
    if relationship.cardinality != "N:M":
        return None

    index = index_tables(tables)
    source = index.get(relationship.source_table_id)
    target = index.get(relationship.target_table_id)
    if source is None or target is None:
        logger.debug(f"Relationship {relationship.id}: endpoint table missing, no junction table")
        return None

    source_pk = source.primary_key
    target_pk = target.primary_key
    if source_pk is None or target_pk is None:
        logger.debug(f"Relationship {relationship.id}: endpoint without primary key, no junction table")
        return None

    junction_id = f"junction-{relationship.id}"
    return Table(
        id=junction_id,
        name=f"{source.name}_{target.name}",
        columns=[
            _junction_column(f"{junction_id}-col-1", source, source_pk, naming),
            _junction_column(f"{junction_id}-col-2", target, target_pk, naming),
        ],
        x=(source.x + target.x) / 2,
        y=(source.y + target.y) / 2,
    )


def _find_relationship(
    schema: Schema,
    relationship_id: Optional[str],
    source_table_id: Optional[str],
    target_table_id: Optional[str],
) -> Optional[Relationship]:
    if relationship_id is not None:
        match = next((r for r in schema.relationships if r.id == relationship_id), None)
        if match is not None:
            return match
    if source_table_id is None or target_table_id is None:
        return None
    return next(
        (
            r
            for r in schema.relationships
            if r.cardinality == "N:M"
            and r.source_table_id == source_table_id
            and r.target_table_id == target_table_id
        ),
        None,
    )

def materialize_junction(
    schema: Schema,
    relationship_id: Optional[str] = None,
    naming: FkNaming = "bare",
    source_table_id: Optional[str] = None,
    target_table_id: Optional[str] = None,
) -> Schema:
    """
    Replace an N:M relationship with a junction table and two 1:N relationships.

    This is the explicit counterpart of synthesize(): the junction table
    becomes part of the returned schema, linked from each endpoint by a
    required 1:N relationship with CASCADE actions, and the N:M
    relationship is dropped so the junction is not generated twice.

    Args:
        schema: Schema snapshot; it is not modified
        relationship_id: Id of the N:M relationship to materialize
        naming: FK column naming policy
        source_table_id: With target_table_id, selects the first N:M
            relationship between the two tables when relationship_id is
            not given or no longer exists
        target_table_id: See source_table_id

    Returns:
        New Schema, or the input schema when nothing can be materialized
    """
    relationship = _find_relationship(schema, relationship_id, source_table_id, target_table_id)
    if relationship is None:
        logger.warning(f"Cannot materialize junction: relationship {relationship_id} not found")
        return schema
    relationship_id = relationship.id

    junction = synthesize(relationship, schema.tables, naming)
    if junction is None:
        logger.warning(f"Cannot materialize junction for relationship {relationship_id}")
        return schema

    if any(t.name == junction.name for t in schema.tables):
        logger.warning(f"Cannot materialize junction: table '{junction.name}' already exists")
        return schema

    index = index_tables(schema.tables)
    source = index[relationship.source_table_id]
    target = index[relationship.target_table_id]
    links = [
        Relationship(
            id=f"{junction.id}-rel-{n}",
            source_table_id=endpoint.id,
            source_column_id=endpoint.primary_key.id,
            target_table_id=junction.id,
            target_column_id=column.id,
            cardinality="1:N",
            source_optional=False,
            target_optional=False,
            on_delete="CASCADE",
            on_update="CASCADE",
        )
        for n, (endpoint, column) in enumerate(zip((source, target), junction.columns), start=1)
    ]

    logger.info(
        f"Materialized junction table '{junction.name}' "
        f"({', '.join(c.name for c in junction.columns)})"
    )
    return schema.model_copy(
        update={
            "tables": [*schema.tables, junction],
            "relationships": [r for r in schema.relationships if r.id != relationship_id] + links,
        }
    )
