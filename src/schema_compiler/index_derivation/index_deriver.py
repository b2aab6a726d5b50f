"""Composite index derivation service."""

from __future__ import annotations

import json

from schema_compiler.schema_management.field_classification import (
    classify_fields,
    grants_index_ownership,
)
from schema_compiler.schema_management.schema_models import Entity, SchemaModel

from .index_models import CompositeIndex, IndexField, IndexManifest, IndexOrder


def derive_indexes(schema: SchemaModel) -> IndexManifest:
    """Derive the composite index manifest for every entity in schema order."""
    indexes: list[CompositeIndex] = []
    for entity in schema.entities:
        indexes.extend(_owner_timestamp_indexes(entity))
        indexes.extend(_declared_indexes(entity))
    return IndexManifest(indexes=tuple(indexes))


def serialize_index_manifest(manifest: IndexManifest) -> str:
    """Render the manifest as indented JSON text."""
    return json.dumps(manifest.to_document(), indent=2, ensure_ascii=False)


def _owner_timestamp_indexes(entity: Entity) -> list[CompositeIndex]:
    classified = classify_fields(entity)
    owner_fields = [item.field for item in classified if grants_index_ownership(item.ownership)]
    timestamp_fields = [item.field for item in classified if item.is_timestamp]
    return [
        CompositeIndex(
            collection_group=entity.collection,
            fields=(
                IndexField(field_path=owner_field.name, order=IndexOrder.ASCENDING),
                IndexField(field_path=timestamp_field.name, order=IndexOrder.DESCENDING),
            ),
        )
        for owner_field in owner_fields
        for timestamp_field in timestamp_fields
    ]


def _declared_indexes(entity: Entity) -> list[CompositeIndex]:
    return [
        CompositeIndex(
            collection_group=entity.collection,
            fields=tuple(IndexField(field_path=field_path) for field_path in index_spec),
        )
        for index_spec in entity.index_specs
    ]
