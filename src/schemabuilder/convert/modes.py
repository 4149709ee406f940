"""Conversion between logical tables and conceptual entities."""

from typing import List

from schemabuilder.config.logging import get_logger
from schemabuilder.ir.conceptual import Attribute, ConceptualRelationship, ConceptualSchema, Entity
from schemabuilder.ir.logical import Column, Relationship, Schema, Table
from schemabuilder.ir.types import ReferentialAction

logger = get_logger(__name__)


def to_conceptual(tables: List[Table]) -> List[Entity]:
    """
    Convert tables to entities.

    Each column becomes an attribute with the same id and name; primary key
    columns become PRIMARY attributes, all others NORMAL. The column type is
    kept on the attribute so to_logical() can restore it.
    """
    return [
        Entity(
            id=table.id,
            name=table.name,
            attributes=[
                Attribute(
                    id=column.id,
                    name=column.name,
                    kind="PRIMARY" if column.primary_key else "NORMAL",
                    data_type=column.type,
                )
                for column in table.columns
            ],
            x=table.x,
            y=table.y,
        )
        for table in tables
    ]


def to_logical(entities: List[Entity]) -> List[Table]:
    """
    Convert entities to tables.

    PRIMARY attributes become non-nullable, unique, auto-increment primary
    key columns. Without a preserved type, primary attributes become INTEGER
    and every other attribute TEXT. MULTIVALUED and DERIVED attributes have
    no logical counterpart and turn into ordinary columns.
    """
    tables = []
    for entity in entities:
        columns = []
        for attribute in entity.attributes:
            is_primary = attribute.kind == "PRIMARY"
            columns.append(
                Column(
                    id=attribute.id,
                    name=attribute.name,
                    type=attribute.data_type or ("INTEGER" if is_primary else "TEXT"),
                    primary_key=is_primary,
                    nullable=not is_primary,
                    unique=is_primary,
                    auto_increment=is_primary,
                )
            )
        tables.append(Table(id=entity.id, name=entity.name, columns=columns, x=entity.x, y=entity.y))
    return tables


def schema_to_conceptual(schema: Schema) -> ConceptualSchema:
    """Convert a logical schema, relationships included, to a conceptual schema."""
    relationships = [
        ConceptualRelationship(
            id=r.id,
            source_entity_id=r.source_table_id,
            target_entity_id=r.target_table_id,
            cardinality=r.cardinality,
            source_optional=r.source_optional,
            target_optional=r.target_optional,
        )
        for r in schema.relationships
    ]
    logger.debug(f"Converted {len(schema.tables)} table(s) to entities")
    return ConceptualSchema(entities=to_conceptual(schema.tables), relationships=relationships)


def _anchor_attribute_id(entity: Entity) -> str:
    anchor = entity.primary_attribute or (entity.attributes[0] if entity.attributes else None)
    return anchor.id if anchor else ""


def conceptual_to_schema(
    conceptual: ConceptualSchema,
    on_delete: ReferentialAction = "CASCADE",
    on_update: ReferentialAction = "CASCADE",
) -> Schema:
    """
    Convert a conceptual schema, relationships included, to a logical schema.

    Relationships are bound to each entity's primary attribute (or its first
    attribute). Relationships to unknown entities are dropped.

    Args:
        conceptual: Conceptual schema snapshot
        on_delete: Referential action for the converted relationships
        on_update: Referential action for the converted relationships

    Returns:
        New logical Schema
    """
    entities = {e.id: e for e in reversed(conceptual.entities)}
    relationships = []
    for r in conceptual.relationships:
        source = entities.get(r.source_entity_id)
        target = entities.get(r.target_entity_id)
        if source is None or target is None:
            logger.debug(f"Conceptual relationship {r.id}: unknown entity, dropped")
            continue
        relationships.append(
            Relationship(
                id=r.id,
                source_table_id=source.id,
                source_column_id=_anchor_attribute_id(source),
                target_table_id=target.id,
                target_column_id=_anchor_attribute_id(target),
                cardinality=r.cardinality,
                source_optional=r.source_optional,
                target_optional=r.target_optional,
                on_delete=on_delete,
                on_update=on_update,
            )
        )
    logger.debug(f"Converted {len(conceptual.entities)} entities to tables")
    return Schema(tables=to_logical(conceptual.entities), relationships=relationships)
