"""Caller-side dispatch of remediation actions attached to findings."""

from dataclasses import dataclass
from typing import Union

from schemabuilder.compile.junction import materialize_junction
from schemabuilder.config.logging import get_logger
from schemabuilder.ir.conceptual import ConceptualSchema
from schemabuilder.ir.logical import Schema
from schemabuilder.ir.types import FkNaming
from .findings import RemediationAction

logger = get_logger(__name__)


class UnknownRemediationError(ValueError):
    """Raised when a remediation action kind has no handler."""


@dataclass
class RemediationResult:
    """Outcome of applying one action."""

    schema: Union[Schema, ConceptualSchema]
    applied: bool
    message: str


def add_primary_key_to_first_column(schema: Schema, table_id: str) -> Schema:
    """
    Make the first column of a table its only primary key.

    The first column becomes a non-nullable primary key; every other column
    loses its key flags and becomes nullable.
    """
    tables = []
    for table in schema.tables:
        if table.id == table_id and table.columns:
            columns = [
                column.model_copy(
                    update={
                        "primary_key": i == 0,
                        "nullable": i != 0,
                        "auto_increment": column.auto_increment and i == 0,
                    }
                )
                for i, column in enumerate(table.columns)
            ]
            table = table.model_copy(update={"columns": columns})
        tables.append(table)
    return schema.model_copy(update={"tables": tables})


def apply_remediation(
    schema: Union[Schema, ConceptualSchema],
    action: RemediationAction,
    naming: FkNaming = "bare",
) -> RemediationResult:
    """
    Apply the action of a finding to a schema.

    Only junction creation and primary key insertion change the schema; the
    other actions are advice for the user and return the schema unchanged.

    Args:
        schema: Schema the finding was computed from
        action: Action taken from a Finding
        naming: FK column naming policy for junction tables

    Returns:
        RemediationResult with the (possibly) new schema

    Raises:
        UnknownRemediationError: If the action kind is not recognized
    """
    params = action.params

    if action.kind == "create_junction_table":
        if not isinstance(schema, Schema):
            return RemediationResult(schema, False, "Junction tables can only be created in logical mode")
        updated = materialize_junction(
            schema,
            params.get("relationship_id"),
            naming,
            source_table_id=params.get("source_table_id"),
            target_table_id=params.get("target_table_id"),
        )
        if updated is schema:
            return RemediationResult(schema, False, "Junction table could not be created")
        junction = updated.tables[-1]
        columns = ", ".join(f"{c.name} ({c.type})" for c in junction.columns)
        return RemediationResult(updated, True, f'Created junction table "{junction.name}" with columns {columns}')

    if action.kind == "add_primary_key":
        if not isinstance(schema, Schema) or schema.table(params["table_id"]) is None:
            return RemediationResult(schema, False, "Table not found")
        table = schema.table(params["table_id"])
        if not table.columns:
            return RemediationResult(schema, False, f'Table "{table.name}" has no columns')
        updated = add_primary_key_to_first_column(schema, table.id)
        return RemediationResult(updated, True, f'Added primary key to table "{table.name}"')

    if action.kind == "add_index":
        return RemediationResult(schema, False, "Create an index on the foreign key column manually")

    if action.kind == "check_length":
        return RemediationResult(schema, False, "Set a maximum length on the text columns manually")

    if action.kind == "rename_duplicate_columns":
        return RemediationResult(schema, False, "Rename the duplicate columns manually")

    if action.kind == "add_primary_attribute":
        return RemediationResult(schema, False, "Add a primary key attribute to the entity")

    logger.warning(f"No handler for remediation action '{action.kind}'")
    raise UnknownRemediationError(f"Unknown remediation action: {action.kind}")
