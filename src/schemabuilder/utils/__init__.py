"""Utility functions for common operations."""

from .ir_io import (
    load_schema_from_json,
    load_conceptual_from_json,
    save_schema_to_json,
    save_conceptual_to_json,
)

__all__ = [
    "load_schema_from_json",
    "load_conceptual_from_json",
    "save_schema_to_json",
    "save_conceptual_to_json",
]
