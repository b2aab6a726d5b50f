"""Ownership classification of entity fields."""

from __future__ import annotations

from dataclasses import dataclass

from .schema_models import Entity, Field, FieldType, OwnershipTag

INDEX_OWNER_MARKERS: tuple[str, ...] = ("userId", "agentId")
ACCESS_OWNER_MARKERS: tuple[str, ...] = INDEX_OWNER_MARKERS + ("ownerId",)


@dataclass(frozen=True)
class ClassifiedField:
    """Field paired with the ownership tag it resolved to."""

    field: Field
    ownership: OwnershipTag

    @property
    def is_timestamp(self) -> bool:
        return self.field.type == FieldType.TIMESTAMP.value


def default_ownership(field_name: str) -> OwnershipTag:
    """Classify a field by case-sensitive substring markers in its name."""
    if any(marker in field_name for marker in INDEX_OWNER_MARKERS):
        return OwnershipTag.OWNER
    if any(marker in field_name for marker in ACCESS_OWNER_MARKERS):
        return OwnershipTag.ACCESS_OWNER
    return OwnershipTag.NONE


def classify_ownership(field: Field) -> OwnershipTag:
    """Return the explicit tag of a field, falling back to the name markers."""
    if field.ownership is not None:
        return field.ownership
    return default_ownership(field.name)


def classify_fields(entity: Entity) -> tuple[ClassifiedField, ...]:
    """Classify every field of an entity in declaration order."""
    return tuple(
        ClassifiedField(field=field, ownership=classify_ownership(field))
        for field in entity.fields
    )


def grants_access_ownership(tag: OwnershipTag) -> bool:
    """Whether a field with this tag identifies the owner in access rules."""
    return tag in (OwnershipTag.OWNER, OwnershipTag.ACCESS_OWNER)


def grants_index_ownership(tag: OwnershipTag) -> bool:
    """Whether a field with this tag participates in owner/timestamp indexes."""
    return tag is OwnershipTag.OWNER
