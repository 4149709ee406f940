"""Conceptual/logical mode conversion."""

from .modes import to_conceptual, to_logical, schema_to_conceptual, conceptual_to_schema

__all__ = ["to_conceptual", "to_logical", "schema_to_conceptual", "conceptual_to_schema"]
