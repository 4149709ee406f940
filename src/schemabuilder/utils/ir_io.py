"""Utilities for loading and saving schemas from/to JSON files."""

import json
from pathlib import Path
from typing import Any, Dict, Union

from schemabuilder.ir.conceptual import ConceptualSchema
from schemabuilder.ir.logical import Schema


def _read_document(path: Path) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    file_content = path.read_text(encoding="utf-8").strip()
    if not file_content:
        raise ValueError(f"Schema file is empty: {path}")

    try:
        document = json.loads(file_content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Schema file {path} is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise ValueError(f"Schema file {path} must contain a JSON object")
    return document


def _nodes_of_type(document: Dict[str, Any], node_type: str) -> list:
    """
    Extract node payloads from an editor export document.

    Editor exports store each table or entity under ``node["data"]`` and its
    canvas position under ``node["position"]``, which wins over any stale
    ``x``/``y`` left in the data.
    """
    payloads = []
    for node in document.get("nodes") or []:
        if node.get("type", node_type) != node_type:
            continue
        data = dict(node.get("data") or {})
        position = node.get("position") or {}
        for axis in ("x", "y"):
            if axis in position:
                data[axis] = position[axis]
            else:
                data.setdefault(axis, 0)
        payloads.append(data)
    return payloads


def load_schema_from_json(schema_path: Path) -> Schema:
    """
    Load a logical Schema from a JSON file.

    Accepts a plain ``{"tables": [...], "relationships": [...]}`` document or
    an editor export with ``nodes``. Missing collections load as empty.

    Args:
        schema_path: Path to the JSON file

    Returns:
        Loaded Schema

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a valid schema document
    """
    document = _read_document(schema_path)
    if "nodes" in document:
        document = {
            "tables": _nodes_of_type(document, "tableNode"),
            "relationships": document.get("relationships") or [],
        }
    try:
        return Schema.model_validate(document)
    except Exception as e:
        raise ValueError(f"Failed to load schema from {schema_path}: {e}") from e


def load_conceptual_from_json(schema_path: Path) -> ConceptualSchema:
    """
    Load a ConceptualSchema from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a valid conceptual document
    """
    document = _read_document(schema_path)
    if "nodes" in document:
        document = {
            "entities": _nodes_of_type(document, "entityNode"),
            "relationships": document.get("conceptualRelationships") or [],
        }
    try:
        return ConceptualSchema.model_validate(document)
    except Exception as e:
        raise ValueError(f"Failed to load conceptual schema from {schema_path}: {e}") from e


def save_schema_to_json(schema: Union[Schema, ConceptualSchema], schema_path: Path) -> None:
    """
    Save a logical or conceptual schema to a JSON file (camelCase keys).

    Note:
        Creates parent directories if they don't exist.
    """
    schema_path = Path(schema_path)
    schema_path.parent.mkdir(parents=True, exist_ok=True)
    schema_path.write_text(schema.model_dump_json(indent=2, by_alias=True), encoding="utf-8")


def save_conceptual_to_json(conceptual: ConceptualSchema, schema_path: Path) -> None:
    """Save a ConceptualSchema to a JSON file (camelCase keys)."""
    save_schema_to_json(conceptual, schema_path)
