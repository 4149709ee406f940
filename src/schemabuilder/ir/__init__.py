"""Intermediate representations: logical tables and conceptual entities."""

from .logical import Column, Table, Relationship, Schema
from .conceptual import Attribute, Entity, ConceptualRelationship, ConceptualSchema

__all__ = [
    "Column",
    "Table",
    "Relationship",
    "Schema",
    "Attribute",
    "Entity",
    "ConceptualRelationship",
    "ConceptualSchema",
]
