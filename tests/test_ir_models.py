"""Tests for IR models."""

from schemabuilder.ir.conceptual import Attribute, ConceptualSchema, Entity
from schemabuilder.ir.logical import Column, Relationship, Schema, Table


def test_column_defaults():
    """Test Column defaults."""
    column = Column(id="c1", name="title")
    assert column.type == "TEXT"
    assert column.nullable is True
    assert column.primary_key is False
    assert column.unique is False
    assert column.is_foreign_key is False
    assert column.references_table is None


def test_auto_increment_implies_primary_key_and_unique():
    """Test auto-increment columns are normalized to unique primary keys."""
    column = Column(id="c1", name="id", type="AUTOINCREMENT", auto_increment=True, nullable=True)
    assert column.primary_key is True
    assert column.unique is True
    assert column.nullable is False


def test_primary_key_is_never_nullable():
    """Test primary key columns are normalized to NOT NULL."""
    column = Column(id="c1", name="id", primary_key=True, nullable=True)
    assert column.nullable is False


def test_table_primary_key_is_first_flagged_column():
    """Test Table.primary_key picks the first primary key column."""
    table = Table(
        id="t1",
        name="Line",
        columns=[
            Column(id="c1", name="note"),
            Column(id="c2", name="order_id", primary_key=True),
            Column(id="c3", name="line_no", primary_key=True),
        ],
    )
    assert table.primary_key.id == "c2"
    assert table.column("c3").name == "line_no"
    assert table.column("missing") is None
    assert table.has_column_named("note")
    assert not table.has_column_named("Note")


def test_table_without_primary_key():
    """Test Table.primary_key is None without key columns."""
    table = Table(id="t1", name="Log", columns=[Column(id="c1", name="message")])
    assert table.primary_key is None


def test_schema_accepts_camel_case_keys():
    """Test the editor's camelCase JSON keys validate into the models."""
    schema = Schema.model_validate(
        {
            "tables": [
                {
                    "id": "t1",
                    "name": "Customer",
                    "columns": [
                        {"id": "c1", "name": "id", "type": "INTEGER", "primaryKey": True},
                        {"id": "c2", "name": "email", "unique": True, "isForeignKey": False},
                    ],
                    "x": 10,
                    "y": 20,
                }
            ],
            "relationships": [
                {
                    "id": "r1",
                    "sourceTableId": "t1",
                    "sourceColumnId": "c1",
                    "targetTableId": "t1",
                    "targetColumnId": "c2",
                    "cardinality": "1:1",
                    "targetOptional": True,
                    "onDelete": "SET NULL",
                }
            ],
        }
    )
    assert schema.tables[0].columns[0].primary_key is True
    assert schema.tables[0].x == 10
    rel = schema.relationships[0]
    assert rel.source_table_id == "t1"
    assert rel.target_optional is True
    assert rel.on_delete == "SET NULL"
    assert rel.on_update == "CASCADE"


def test_schema_dumps_camel_case_keys():
    """Test by_alias dumps produce the editor's key names."""
    schema = Schema(tables=[Table(id="t1", name="A", columns=[Column(id="c1", name="id", primary_key=True)])])
    dumped = schema.model_dump(by_alias=True)
    assert dumped["tables"][0]["columns"][0]["primaryKey"] is True
    assert "autoIncrement" in dumped["tables"][0]["columns"][0]


def test_schema_table_lookup():
    """Test Schema.table lookup by id."""
    schema = Schema(tables=[Table(id="t1", name="A"), Table(id="t2", name="B")])
    assert schema.table("t2").name == "B"
    assert schema.table("t3") is None


def test_relationship_defaults():
    """Test Relationship defaults."""
    rel = Relationship(
        id="r1",
        source_table_id="a",
        source_column_id="a1",
        target_table_id="b",
        target_column_id="b1",
    )
    assert rel.cardinality == "1:N"
    assert rel.source_optional is False
    assert rel.target_optional is False
    assert rel.on_delete == "CASCADE"


def test_attribute_kind_uses_type_key():
    """Test attribute kind is read from the editor's "type" key."""
    attribute = Attribute.model_validate({"id": "a1", "name": "id", "type": "PRIMARY"})
    assert attribute.kind == "PRIMARY"
    assert Attribute(id="a2", name="tags", kind="MULTIVALUED").kind == "MULTIVALUED"
    assert Attribute(id="a3", name="age").kind == "NORMAL"


def test_conceptual_schema():
    """Test ConceptualSchema model."""
    entity = Entity(
        id="e1",
        name="Product",
        attributes=[
            Attribute(id="a1", name="product_id", kind="PRIMARY"),
            Attribute(id="a2", name="name"),
        ],
    )
    conceptual = ConceptualSchema(entities=[entity])
    assert conceptual.entity("e1").primary_attribute.name == "product_id"
    assert conceptual.entity("e2") is None
    assert Entity(id="e3", name="Empty").primary_attribute is None
