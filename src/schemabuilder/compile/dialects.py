"""Logical type to physical type mapping per SQL dialect."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from schemabuilder.config.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Dialect:
    """Type table and auto-increment handling for one SQL dialect."""

    name: str
    types: Dict[str, str] = field(default_factory=dict)
    fallback: str = "VARCHAR(255)"
    autoincrement_marker: Optional[str] = None
    # Replaces the mapped type of auto-increment columns only; FK copies keep the plain type
    autoincrement_type: Optional[str] = None

    def map_type(self, logical_type: str) -> str:
        return self.types.get(logical_type.upper(), self.fallback)

    def column_type(self, logical_type: str, auto_increment: bool) -> str:
        if auto_increment and self.autoincrement_type and logical_type.upper() == "AUTOINCREMENT":
            return self.autoincrement_type
        return self.map_type(logical_type)


ACCESS = Dialect(
    name="ACCESS",
    types={
        "TEXT": "VARCHAR(255)",
        "INTEGER": "INTEGER",
        "LONG": "LONG",
        "DOUBLE": "DOUBLE",
        "CURRENCY": "CURRENCY",
        "DATETIME": "DATETIME",
        "BOOLEAN": "BIT",
        "AUTOINCREMENT": "COUNTER",
        "MEMO": "LONGTEXT",
        "OLE": "OLEOBJECT",
    },
    autoincrement_marker="COUNTER",
)

SQLITE = Dialect(
    name="SQLITE",
    types={
        "TEXT": "TEXT",
        "INTEGER": "INTEGER",
        "LONG": "INTEGER",
        "DOUBLE": "REAL",
        "CURRENCY": "NUMERIC",
        "DATETIME": "DATETIME",
        "BOOLEAN": "INTEGER",
        "AUTOINCREMENT": "INTEGER",
        "MEMO": "TEXT",
        "OLE": "BLOB",
    },
    fallback="TEXT",
)

MYSQL = Dialect(
    name="MYSQL",
    types={
        "TEXT": "VARCHAR(255)",
        "INTEGER": "INT",
        "LONG": "BIGINT",
        "DOUBLE": "DOUBLE",
        "CURRENCY": "DECIMAL(19,4)",
        "DATETIME": "DATETIME",
        "BOOLEAN": "TINYINT(1)",
        "AUTOINCREMENT": "INT",
        "MEMO": "LONGTEXT",
        "OLE": "LONGBLOB",
    },
    autoincrement_marker="AUTO_INCREMENT",
)

POSTGRESQL = Dialect(
    name="POSTGRESQL",
    types={
        "TEXT": "VARCHAR(255)",
        "INTEGER": "INTEGER",
        "LONG": "BIGINT",
        "DOUBLE": "DOUBLE PRECISION",
        "CURRENCY": "NUMERIC(19,4)",
        "DATETIME": "TIMESTAMP",
        "BOOLEAN": "BOOLEAN",
        "AUTOINCREMENT": "INTEGER",
        "MEMO": "TEXT",
        "OLE": "BYTEA",
    },
    autoincrement_type="SERIAL",
)

DIALECTS: Dict[str, Dialect] = {d.name: d for d in (ACCESS, SQLITE, MYSQL, POSTGRESQL)}


def get_dialect(name: str) -> Dialect:
    """Look up a dialect by name; unknown names fall back to ACCESS."""
    dialect = DIALECTS.get(name.upper())
    if dialect is None:
        logger.warning(f"Unknown SQL dialect '{name}', using ACCESS")
        return ACCESS
    return dialect
