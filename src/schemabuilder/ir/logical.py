"""Logical (table/column) schema model."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .types import Cardinality, ReferentialAction


class LogicalModel(BaseModel):
    """Base for logical models; accepts snake_case and the editor's camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Column(LogicalModel):
    """A table column with its key flags and optional foreign key markers."""

    id: str
    name: str
    type: str = "TEXT"  # one of DATA_TYPES; anything else renders as VARCHAR(255)
    primary_key: bool = False
    nullable: bool = True
    unique: bool = False
    auto_increment: bool = False
    is_foreign_key: bool = False
    references_table: Optional[str] = None
    references_column: Optional[str] = None

    @model_validator(mode="after")
    def _normalize_key_flags(self) -> "Column":
        if self.auto_increment:
            self.primary_key = True
            self.unique = True
        if self.primary_key:
            self.nullable = False
        return self


class Table(LogicalModel):
    """A table on the canvas. Position is carried through untouched."""

    id: str
    name: str
    columns: List[Column] = Field(default_factory=list)
    x: float = 0
    y: float = 0

    @property
    def primary_key(self) -> Optional[Column]:
        """The first primary-key column, which is treated as the table's key."""
        return next((c for c in self.columns if c.primary_key), None)

    def column(self, column_id: str) -> Optional[Column]:
        return next((c for c in self.columns if c.id == column_id), None)

    def has_column_named(self, name: str) -> bool:
        return any(c.name == name for c in self.columns)


class Relationship(LogicalModel):
    """A relationship between two table columns."""

    id: str
    source_table_id: str
    source_column_id: str
    target_table_id: str
    target_column_id: str
    cardinality: Cardinality = "1:N"
    source_optional: bool = False
    target_optional: bool = False
    on_delete: ReferentialAction = "CASCADE"
    on_update: ReferentialAction = "CASCADE"


class Schema(LogicalModel):
    """Logical schema snapshot: tables plus the relationships between them."""

    tables: List[Table] = Field(default_factory=list)
    relationships: List[Relationship] = Field(default_factory=list)

    def table(self, table_id: str) -> Optional[Table]:
        return next((t for t in self.tables if t.id == table_id), None)
