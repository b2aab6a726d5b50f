"""Schema report aggregation service."""

from __future__ import annotations

from schema_compiler.access_rules.policy_classification import (
    AccessPolicy,
    classify_entity_policy,
)
from schema_compiler.capacity_estimation.capacity_estimator import estimate_capacity
from schema_compiler.schema_management.schema_models import (
    Entity,
    Relationship,
    RelationshipType,
    SchemaModel,
)

from .report_models import (
    CapacityRow,
    CollectionAccess,
    EntityBreakdown,
    RelationshipSummary,
    ReportOverview,
    SchemaReport,
    SecuritySummary,
)

_ARROWS = {
    RelationshipType.ONE_TO_MANY.value: "→ *",
    RelationshipType.MANY_TO_ONE.value: "* →",
    RelationshipType.ONE_TO_ONE.value: "→",
}
_DEFAULT_ARROW = "* ↔ *"

# (read, create, update, delete)
_ACCESS_LABELS: dict[AccessPolicy, tuple[str, str, str, str]] = {
    AccessPolicy.OWNERSHIP: ("Authenticated", "Authenticated", "Owner + Admin", "Owner + Admin"),
    AccessPolicy.USER_PROFILE: (
        "Owner + Admin",
        "Authenticated",
        "Owner + Admin (role locked)",
        "Admin only",
    ),
    AccessPolicy.DEFAULT: ("Authenticated", "Admin only", "Admin only", "Admin only"),
}


def build_report(schema: SchemaModel) -> SchemaReport:
    """Aggregate overview, per-entity, security and capacity sections."""
    return SchemaReport(
        overview=_build_overview(schema),
        entities=tuple(_build_breakdown(entity) for entity in schema.entities),
        security=SecuritySummary(
            roles=schema.roles,
            collections=tuple(_build_access(entity) for entity in schema.entities),
        ),
        capacity=tuple(
            CapacityRow(collection=entity.collection, estimate=estimate_capacity(entity))
            for entity in schema.entities
        ),
    )


def relationship_arrow(relationship_type: str) -> str:
    """Direction arrow for a relationship type; unknown types read as many-to-many."""
    return _ARROWS.get(relationship_type, _DEFAULT_ARROW)


def _build_overview(schema: SchemaModel) -> ReportOverview:
    entities = schema.entities
    return ReportOverview(
        collections=len(entities),
        total_fields=sum(len(entity.fields) for entity in entities),
        relationships=sum(len(entity.relationships) for entity in entities),
        indexes=sum(len(entity.index_specs) for entity in entities),
        roles=len(schema.roles),
    )


def _build_breakdown(entity: Entity) -> EntityBreakdown:
    return EntityBreakdown(
        collection=entity.collection,
        model=entity.name,
        fields=entity.fields,
        relationships=tuple(_summarize_relationship(item) for item in entity.relationships),
        index_specs=entity.index_specs,
    )


def _summarize_relationship(relationship: Relationship) -> RelationshipSummary:
    return RelationshipSummary(
        type=relationship.type,
        target_entity=relationship.target_entity,
        via_field=relationship.via_field,
        arrow=relationship_arrow(relationship.type),
    )


def _build_access(entity: Entity) -> CollectionAccess:
    entity_policy = classify_entity_policy(entity)
    read, create, update, delete = _ACCESS_LABELS[entity_policy.policy]
    return CollectionAccess(
        collection=entity.collection,
        policy=entity_policy.policy,
        owner_field=entity_policy.owner_field,
        read=read,
        create=create,
        update=update,
        delete=delete,
    )
