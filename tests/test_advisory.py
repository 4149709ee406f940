"""Tests for the advisory engine."""

import pytest

from conftest import make_table, pk
from schemabuilder.advisory.engine import analyze, analyze_conceptual, analyze_logical
from schemabuilder.ir.conceptual import Attribute, ConceptualRelationship, ConceptualSchema, Entity
from schemabuilder.ir.logical import Column, Relationship, Schema


def _ids(findings):
    return [f.id for f in findings]


def test_clean_schema_has_no_issues(customer_order):
    """Test a keyed schema without text columns has no issues."""
    report = analyze_logical(customer_order)
    assert report.issues == []
    assert report.has_high_priority is False


def test_many_to_many_recommendation(student_course):
    """Test N:M relationships are flagged with a junction action."""
    report = analyze_logical(student_course)
    finding = next(f for f in report.recommendations if f.kind == "n_m_relationship")
    assert finding.id == "rec-nm-r-enrol"
    assert finding.severity == "high"
    assert '"Student"' in finding.description and '"Course"' in finding.description
    assert finding.action.kind == "create_junction_table"
    assert finding.action.params == {
        "relationship_id": "r-enrol",
        "source_table_id": "t-student",
        "target_table_id": "t-course",
    }
    assert report.has_high_priority is True


def test_missing_primary_key_issue():
    """Test tables without a primary key are reported."""
    schema = Schema(tables=[make_table("t-log", "Log", Column(id="c1", name="at", type="DATETIME"))])
    report = analyze_logical(schema)
    assert _ids(report.issues) == ["val-nopk-t-log"]
    issue = report.issues[0]
    assert issue.severity == "high"
    assert issue.action.kind == "add_primary_key"
    assert issue.action.params == {"table_id": "t-log"}


def test_duplicate_columns_are_case_insensitive():
    """Test duplicate column names are matched ignoring case."""
    schema = Schema(
        tables=[
            make_table(
                "t1",
                "Person",
                pk("c1"),
                Column(id="c2", name="Email", type="INTEGER"),
                Column(id="c3", name="email", type="INTEGER"),
            )
        ]
    )
    report = analyze_logical(schema)
    assert _ids(report.issues) == ["val-dupcol-t1"]
    issue = report.issues[0]
    assert issue.severity == "medium"
    assert issue.action.kind == "rename_duplicate_columns"
    assert issue.action.params["column_names"] == ["email"]


def test_junction_id_collision_is_a_duplicate(student_course):
    """Test the bare id/id junction columns are caught once materialized."""
    from schemabuilder.compile.junction import materialize_junction

    report = analyze_logical(materialize_junction(student_course, "r-enrol"))
    assert "val-dupcol-junction-r-enrol" in _ids(report.issues)


def test_foreign_key_index_recommendation(customer_order):
    """Test a non-unique relationship source column gets an index recommendation."""
    rel = customer_order.relationships[0]
    schema = customer_order.model_copy(
        update={"relationships": [rel.model_copy(update={"source_table_id": "t-order", "source_column_id": "c-order-date"})]}
    )
    report = analyze_logical(schema)
    finding = next(f for f in report.recommendations if f.kind == "missing_index")
    assert finding.id == "rec-index-r1"
    assert finding.severity == "medium"
    assert finding.action.params == {"table_id": "t-order", "column_id": "c-order-date"}


def test_unique_source_column_needs_no_index():
    """Test a unique (auto-increment) key column is not flagged."""
    schema = Schema(
        tables=[
            make_table("t-a", "A", Column(id="a1", name="id", type="AUTOINCREMENT", auto_increment=True)),
            make_table("t-b", "B", pk("b1")),
        ],
        relationships=[
            Relationship(id="r1", source_table_id="t-a", source_column_id="a1",
                         target_table_id="t-b", target_column_id="b1"),
        ],
    )
    report = analyze_logical(schema)
    assert not any(f.kind == "missing_index" for f in report.recommendations)


def test_text_length_recommendation_per_table():
    """Test text columns without a length hint give one low finding per table."""
    schema = Schema(
        tables=[
            make_table(
                "t1",
                "Post",
                pk("c1"),
                Column(id="c2", name="title", type="TEXT"),
                Column(id="c3", name="body", type="TEXT"),
                Column(id="c4", name="title_Length", type="TEXT"),
                Column(id="c5", name="file_size", type="TEXT"),
            )
        ]
    )
    report = analyze_logical(schema)
    findings = [f for f in report.recommendations if f.kind == "text_length"]
    assert _ids(findings) == ["rec-textlen-t1"]
    assert findings[0].severity == "low"
    assert findings[0].action.kind == "check_length"
    assert findings[0].action.params["column_ids"] == ["c2", "c3"]


def test_conceptual_analysis():
    """Test conceptual mode flags keyless entities and N:M relationships."""
    conceptual = ConceptualSchema(
        entities=[
            Entity(id="e1", name="Student", attributes=[Attribute(id="a1", name="id", kind="PRIMARY")]),
            Entity(id="e2", name="Course", attributes=[Attribute(id="a2", name="title")]),
        ],
        relationships=[
            ConceptualRelationship(id="r1", source_entity_id="e1", target_entity_id="e2", cardinality="N:M"),
        ],
    )
    report = analyze_conceptual(conceptual)
    assert _ids(report.issues) == ["conc-nopk-e2"]
    assert report.issues[0].action.kind == "add_primary_attribute"
    assert _ids(report.recommendations) == ["conc-nm-r1"]
    assert report.recommendations[0].severity == "info"
    assert report.recommendations[0].action is None


def test_analyze_infers_mode(student_course):
    """Test analyze picks the mode from the schema type."""
    logical = analyze(student_course)
    assert "rec-nm-r-enrol" in _ids(logical.recommendations)

    conceptual = analyze(student_course, mode="CONCEPTUAL")
    assert _ids(conceptual.recommendations) == ["conc-nm-r-enrol"]


def test_analyze_converts_conceptual_for_logical_mode():
    """Test a conceptual schema analyzed in logical mode is converted first."""
    conceptual = ConceptualSchema(entities=[Entity(id="e1", name="Note", attributes=[Attribute(id="a1", name="text")])])
    report = analyze(conceptual, mode="LOGICAL")
    assert "val-nopk-e1" in _ids(report.issues)
    assert "rec-textlen-e1" in _ids(report.recommendations)


def test_findings_combine_issues_and_recommendations(student_course):
    """Test the findings property lists issues before recommendations."""
    schema = student_course.model_copy(
        update={"tables": student_course.tables + [make_table("t-x", "X", Column(id="x1", name="n", type="INTEGER"))]}
    )
    report = analyze_logical(schema)
    assert report.findings == report.issues + report.recommendations
    assert report.findings[0].id == "val-nopk-t-x"


def test_analyze_mode_is_case_insensitive(student_course):
    """Test a lowercase mode selects the same checks as its uppercase form."""
    assert analyze(student_course, mode="logical") == analyze(student_course, mode="LOGICAL")
    assert _ids(analyze(student_course, mode="conceptual").recommendations) == ["conc-nm-r-enrol"]


def test_analyze_rejects_unknown_mode(student_course):
    """Test an unknown mode raises instead of silently running conceptual checks."""
    with pytest.raises(ValueError, match="PHYSICAL"):
        analyze(student_course, mode="physical")
