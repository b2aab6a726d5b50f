"""Schema report entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from schema_compiler.access_rules.policy_classification import AccessPolicy
from schema_compiler.capacity_estimation.capacity_estimator import CapacityEstimate
from schema_compiler.schema_management.schema_models import Field, Role


class ReportFormat(str, Enum):
    """Report encodings; WORKBOOK is only available as a file export."""

    STRUCTURED = "structured"
    TEXT = "text"
    WORKBOOK = "xlsx"


@dataclass(frozen=True)
class ReportOverview:
    """Schema-wide totals."""

    collections: int
    total_fields: int
    relationships: int
    indexes: int
    roles: int


@dataclass(frozen=True)
class RelationshipSummary:
    """Relationship annotated with its direction arrow."""

    type: str
    target_entity: str
    via_field: str
    arrow: str


@dataclass(frozen=True)
class EntityBreakdown:
    """Fields, relationships and declared indexes of one entity."""

    collection: str
    model: str
    fields: tuple[Field, ...]
    relationships: tuple[RelationshipSummary, ...]
    index_specs: tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class CollectionAccess:  # pylint: disable=too-many-instance-attributes
    """Access summary of one collection."""

    collection: str
    policy: AccessPolicy
    owner_field: str | None
    read: str
    create: str
    update: str
    delete: str


@dataclass(frozen=True)
class SecuritySummary:
    """Roles and the per-collection access policies."""

    roles: tuple[Role, ...]
    collections: tuple[CollectionAccess, ...]


@dataclass(frozen=True)
class CapacityRow:
    """Capacity estimate of one collection."""

    collection: str
    estimate: CapacityEstimate


@dataclass(frozen=True)
class SchemaReport:
    """Structural report shared by every report encoding."""

    overview: ReportOverview
    entities: tuple[EntityBreakdown, ...]
    security: SecuritySummary
    capacity: tuple[CapacityRow, ...]
