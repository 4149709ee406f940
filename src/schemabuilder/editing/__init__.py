"""Schema edits that carry modeling rules (connections, cascading deletes)."""

from .connect import connect_tables, delete_table

__all__ = ["connect_tables", "delete_table"]
