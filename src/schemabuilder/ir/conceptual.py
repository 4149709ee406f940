"""Conceptual (ER-style entity/attribute) model."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .types import AttributeKind, Cardinality


class ConceptualModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Attribute(ConceptualModel):
    """An attribute of an entity."""

    id: str
    name: str
    kind: AttributeKind = Field("NORMAL", alias="type")
    # Logical type kept only so a later conversion back to tables can restore it
    data_type: Optional[str] = None


class Entity(ConceptualModel):
    """An entity in the conceptual model."""

    id: str
    name: str
    attributes: List[Attribute] = Field(default_factory=list)
    x: float = 0
    y: float = 0

    @property
    def primary_attribute(self) -> Optional[Attribute]:
        return next((a for a in self.attributes if a.kind == "PRIMARY"), None)


class ConceptualRelationship(ConceptualModel):
    """A relationship between two entities."""

    id: str
    source_entity_id: str
    target_entity_id: str
    cardinality: Cardinality = "1:N"
    source_optional: bool = False
    target_optional: bool = False
    role: str = ""


class ConceptualSchema(ConceptualModel):
    """Conceptual ER-style model."""

    entities: List[Entity] = Field(default_factory=list)
    relationships: List[ConceptualRelationship] = Field(default_factory=list)

    def entity(self, entity_id: str) -> Optional[Entity]:
        return next((e for e in self.entities if e.id == entity_id), None)
