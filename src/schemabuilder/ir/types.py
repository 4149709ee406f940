"""Shared literal types for the logical and conceptual models."""

from typing import Literal, Tuple

DATA_TYPES: Tuple[str, ...] = (
    "TEXT",
    "INTEGER",
    "LONG",
    "DOUBLE",
    "CURRENCY",
    "DATETIME",
    "BOOLEAN",
    "AUTOINCREMENT",
    "MEMO",
    "OLE",
)

Cardinality = Literal["1:1", "1:N", "N:1", "N:M"]

ReferentialAction = Literal["CASCADE", "SET NULL", "RESTRICT", "NO ACTION"]

AttributeKind = Literal["PRIMARY", "NORMAL", "MULTIVALUED", "DERIVED"]

SQLDialect = Literal["ACCESS", "SQLITE", "MYSQL", "POSTGRESQL"]

SchemaMode = Literal["CONCEPTUAL", "LOGICAL"]

# bare: FK column takes the referenced primary key's name ("id")
# prefixed: FK column is "<referenced table>_<primary key>" ("Customer_id")
FkNaming = Literal["bare", "prefixed"]
