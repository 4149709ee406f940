"""Compilation of logical schemas into foreign keys, junction tables and DDL."""

from .resolver import resolve
from .junction import synthesize, materialize_junction
from .ddl import generate_sql
from .dialects import DIALECTS, get_dialect

__all__ = [
    "resolve",
    "synthesize",
    "materialize_junction",
    "generate_sql",
    "DIALECTS",
    "get_dialect",
]
