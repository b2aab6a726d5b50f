"""Schema model entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FieldType(str, Enum):
    """Known field types; unknown type strings are carried through as-is."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    ARRAY = "array"
    OBJECT = "object"
    REFERENCE = "reference"
    GEOPOINT = "geopoint"
    MAP = "map"


class RelationshipType(str, Enum):
    """Cardinality of a relationship between two entities."""

    ONE_TO_ONE = "oneToOne"
    ONE_TO_MANY = "oneToMany"
    MANY_TO_ONE = "manyToOne"
    MANY_TO_MANY = "manyToMany"


class OwnershipTag(str, Enum):
    """Ownership role a field plays for access rules and derived indexes."""

    OWNER = "owner"
    ACCESS_OWNER = "access_owner"
    NONE = "none"


@dataclass(frozen=True)
class Field:
    """One field of an entity."""

    name: str
    type: str = FieldType.TEXT.value
    required: bool = False
    default: Any = None
    ownership: OwnershipTag | None = None


@dataclass(frozen=True)
class Relationship:
    """Link from an entity to another entity through a local field."""

    type: str
    target_entity: str
    via_field: str


@dataclass(frozen=True)
class Entity:
    """One logical record type, stored in one collection."""

    name: str
    collection_name: str | None = None
    fields: tuple[Field, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    index_specs: tuple[tuple[str, ...], ...] = ()

    @property
    def collection(self) -> str:
        """Explicit collection name, or the lower-cased entity name plus ``s``."""
        if self.collection_name:
            return self.collection_name
        return f"{self.name.lower()}s"


@dataclass(frozen=True)
class Role:
    """User role; permissions are informational only."""

    role: str
    permissions: tuple[str, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class SchemaModel:
    """Declarative description of an application's data model."""

    entities: tuple[Entity, ...] = ()
    roles: tuple[Role, ...] = ()
