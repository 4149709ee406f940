"""Rule-based structural analysis of logical and conceptual schemas."""

from typing import List, Optional, Union

from schemabuilder.config.logging import get_logger
from schemabuilder.convert.modes import conceptual_to_schema, schema_to_conceptual
from schemabuilder.ir.conceptual import ConceptualSchema
from schemabuilder.ir.logical import Schema
from schemabuilder.ir.types import SchemaMode
from .findings import AdvisoryReport, Finding, RemediationAction

logger = get_logger(__name__)

# Column name fragments that already document a length limit
LENGTH_HINTS = ("length", "size")


def _check_many_to_many(schema: Schema) -> List[Finding]:
    findings = []
    for rel in schema.relationships:
        if rel.cardinality != "N:M":
            continue
        source = schema.table(rel.source_table_id)
        target = schema.table(rel.target_table_id)
        if source is None or target is None:
            continue
        findings.append(
            Finding(
                id=f"rec-nm-{rel.id}",
                kind="n_m_relationship",
                title="Many-to-many relationship found",
                description=(
                    f'The relationship between "{source.name}" and "{target.name}" is N:M. '
                    f"A junction table is recommended."
                ),
                severity="high",
                action=RemediationAction(
                    kind="create_junction_table",
                    label="Create junction table",
                    params={
                        "relationship_id": rel.id,
                        "source_table_id": source.id,
                        "target_table_id": target.id,
                    },
                ),
            )
        )
    return findings


def _check_primary_keys(schema: Schema) -> List[Finding]:
    return [
        Finding(
            id=f"val-nopk-{table.id}",
            kind="no_primary_key",
            title="Table without primary key",
            description=f'Table "{table.name}" has no primary key.',
            severity="high",
            action=RemediationAction(
                kind="add_primary_key",
                label="Add primary key",
                params={"table_id": table.id},
            ),
        )
        for table in schema.tables
        if table.primary_key is None
    ]


def _check_duplicate_columns(schema: Schema) -> List[Finding]:
    findings = []
    for table in schema.tables:
        seen = set()
        duplicates = []
        for column in table.columns:
            key = column.name.lower()
            if key in seen and key not in duplicates:
                duplicates.append(key)
            seen.add(key)
        if not duplicates:
            continue
        findings.append(
            Finding(
                id=f"val-dupcol-{table.id}",
                kind="duplicate_columns",
                title="Duplicate column names",
                description=f'Table "{table.name}" has columns with the same name: {", ".join(duplicates)}.',
                severity="medium",
                action=RemediationAction(
                    kind="rename_duplicate_columns",
                    label="Fix",
                    params={"table_id": table.id, "column_names": duplicates},
                ),
            )
        )
    return findings


def _check_foreign_key_indexes(schema: Schema) -> List[Finding]:
    findings = []
    for rel in schema.relationships:
        source = schema.table(rel.source_table_id)
        if source is None:
            continue
        column = source.column(rel.source_column_id)
        if column is None or column.unique:
            continue
        findings.append(
            Finding(
                id=f"rec-index-{rel.id}",
                kind="missing_index",
                title="Foreign key without index",
                description=(
                    f'Column "{column.name}" in table "{source.name}" takes part in a '
                    f"relationship but has no index."
                ),
                severity="medium",
                action=RemediationAction(
                    kind="add_index",
                    label="Add index",
                    params={"table_id": source.id, "column_id": column.id},
                ),
            )
        )
    return findings


def _check_text_lengths(schema: Schema) -> List[Finding]:
    findings = []
    for table in schema.tables:
        unbounded = [
            c
            for c in table.columns
            if c.type == "TEXT" and not any(hint in c.name.lower() for hint in LENGTH_HINTS)
        ]
        if not unbounded:
            continue
        findings.append(
            Finding(
                id=f"rec-textlen-{table.id}",
                kind="text_length",
                title="Text columns without length limit",
                description=(
                    f'Table "{table.name}" has text columns without a maximum length: '
                    f"{', '.join(c.name for c in unbounded)}."
                ),
                severity="low",
                action=RemediationAction(
                    kind="check_length",
                    label="Add length limits",
                    params={"table_id": table.id, "column_ids": [c.id for c in unbounded]},
                ),
            )
        )
    return findings


def analyze_logical(schema: Schema) -> AdvisoryReport:
    """
    Analyze a logical schema.

    Args:
        schema: Logical schema snapshot

    Returns:
        AdvisoryReport with validation issues (missing primary keys,
        duplicate column names) and recommendations (junction tables,
        indexes, text lengths)
    """
    return AdvisoryReport(
        issues=_check_primary_keys(schema) + _check_duplicate_columns(schema),
        recommendations=(
            _check_many_to_many(schema)
            + _check_foreign_key_indexes(schema)
            + _check_text_lengths(schema)
        ),
    )


def analyze_conceptual(conceptual: ConceptualSchema) -> AdvisoryReport:
    """
    Analyze a conceptual schema.

    Args:
        conceptual: Conceptual schema snapshot

    Returns:
        AdvisoryReport with entities lacking a primary attribute as issues
        and N:M relationships as informational recommendations
    """
    issues = [
        Finding(
            id=f"conc-nopk-{entity.id}",
            kind="no_primary_key",
            title="Entity without primary key",
            description=f'Entity "{entity.name}" has no primary key attribute.',
            severity="high",
            action=RemediationAction(
                kind="add_primary_attribute",
                label="Add primary key",
                params={"entity_id": entity.id},
            ),
        )
        for entity in conceptual.entities
        if entity.primary_attribute is None
    ]

    recommendations = []
    for rel in conceptual.relationships:
        if rel.cardinality != "N:M":
            continue
        source = conceptual.entity(rel.source_entity_id)
        target = conceptual.entity(rel.target_entity_id)
        if source is None or target is None:
            continue
        # Junction tables only exist in logical mode, so there is nothing to apply here
        recommendations.append(
            Finding(
                id=f"conc-nm-{rel.id}",
                kind="n_m_relationship",
                title="Many-to-many relationship in conceptual schema",
                description=(
                    f'The relationship between "{source.name}" and "{target.name}" is N:M. '
                    f"Converting to a logical schema will require a junction table."
                ),
                severity="info",
            )
        )

    return AdvisoryReport(issues=issues, recommendations=recommendations)


def analyze(
    schema: Union[Schema, ConceptualSchema],
    mode: Optional[SchemaMode] = None,
) -> AdvisoryReport:
    """
    Run every check for the given mode.

    The mode defaults to the kind of schema passed in. When the mode and
    the schema disagree, the schema is converted to the requested mode
    first.

    Args:
        schema: Logical or conceptual schema snapshot
        mode: LOGICAL or CONCEPTUAL

    Returns:
        AdvisoryReport

    Raises:
        ValueError: If mode is not LOGICAL or CONCEPTUAL (any case)
    """
    if mode is None:
        mode = "CONCEPTUAL" if isinstance(schema, ConceptualSchema) else "LOGICAL"
    mode = mode.upper()
    if mode not in ("LOGICAL", "CONCEPTUAL"):
        raise ValueError(f"Unknown analysis mode: {mode}")

    if mode == "LOGICAL":
        logical = schema if isinstance(schema, Schema) else conceptual_to_schema(schema)
        report = analyze_logical(logical)
    else:
        conceptual = schema if isinstance(schema, ConceptualSchema) else schema_to_conceptual(schema)
        report = analyze_conceptual(conceptual)

    if report.issues:
        logger.warning(
            f"{mode.title()} analysis found {len(report.issues)} issue(s) "
            f"and {len(report.recommendations)} recommendation(s)"
        )
    else:
        logger.info(f"{mode.title()} analysis passed with {len(report.recommendations)} recommendation(s)")
    return report
