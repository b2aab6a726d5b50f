"""Access policy selection for entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from schema_compiler.schema_management.field_classification import (
    classify_fields,
    grants_access_ownership,
)
from schema_compiler.schema_management.schema_models import Entity


class AccessPolicy(str, Enum):
    """Mutually exclusive access policies, listed in precedence order."""

    OWNERSHIP = "ownership"
    USER_PROFILE = "user-profile"
    DEFAULT = "default"


@dataclass(frozen=True)
class EntityPolicy:
    """Policy chosen for one entity and the owner field that triggered it."""

    policy: AccessPolicy
    owner_field: str | None = None


def classify_entity_policy(entity: Entity) -> EntityPolicy:
    """Pick the access policy of an entity; the first matching rule wins.

    1. Ownership: the first field whose ownership tag grants access ownership.
    2. User profile: the entity name contains ``user`` (case-insensitive).
    3. Default otherwise.
    """
    for classified in classify_fields(entity):
        if grants_access_ownership(classified.ownership):
            return EntityPolicy(policy=AccessPolicy.OWNERSHIP, owner_field=classified.field.name)
    if "user" in entity.name.lower():
        return EntityPolicy(policy=AccessPolicy.USER_PROFILE)
    return EntityPolicy(policy=AccessPolicy.DEFAULT)
