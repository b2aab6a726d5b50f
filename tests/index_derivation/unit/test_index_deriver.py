"""Composite index derivation tests."""

from __future__ import annotations

import json

from schema_compiler.index_derivation.index_deriver import derive_indexes, serialize_index_manifest
from schema_compiler.index_derivation.index_models import IndexOrder
from schema_compiler.schema_management.schema_models import Entity, Field, SchemaModel


def _field_pairs(index) -> list[tuple[str, str]]:
    return [(field.field_path, field.order.value) for field in index.fields]


def test_order_entity_yields_one_derived_and_one_declared_index() -> None:
    schema = SchemaModel(
        entities=(
            Entity(
                name="Order",
                fields=(Field(name="userId"), Field(name="createdAt", type="timestamp")),
                index_specs=(("status", "createdAt"),),
            ),
        )
    )

    manifest = derive_indexes(schema)

    assert len(manifest.indexes) == 2
    assert [index.collection_group for index in manifest.indexes] == ["orders", "orders"]
    assert _field_pairs(manifest.indexes[0]) == [
        ("userId", "ASCENDING"),
        ("createdAt", "DESCENDING"),
    ]
    assert _field_pairs(manifest.indexes[1]) == [
        ("status", "ASCENDING"),
        ("createdAt", "ASCENDING"),
    ]


def test_owner_by_timestamp_product_iterates_owners_first() -> None:
    schema = SchemaModel(
        entities=(
            Entity(
                name="Shift",
                fields=(
                    Field(name="startedAt", type="timestamp"),
                    Field(name="userId"),
                    Field(name="endedAt", type="timestamp"),
                    Field(name="agentId"),
                ),
            ),
        )
    )

    manifest = derive_indexes(schema)

    assert [
        (index.fields[0].field_path, index.fields[1].field_path) for index in manifest.indexes
    ] == [
        ("userId", "startedAt"),
        ("userId", "endedAt"),
        ("agentId", "startedAt"),
        ("agentId", "endedAt"),
    ]
    assert all(index.fields[1].order is IndexOrder.DESCENDING for index in manifest.indexes)


def test_owner_id_fields_do_not_produce_derived_indexes() -> None:
    schema = SchemaModel(
        entities=(
            Entity(
                name="Ticket",
                fields=(Field(name="ownerId"), Field(name="updatedAt", type="timestamp")),
            ),
        )
    )

    assert derive_indexes(schema).indexes == ()


def test_duplicate_combinations_are_not_deduplicated() -> None:
    schema = SchemaModel(
        entities=(
            Entity(
                name="Order",
                fields=(Field(name="userId"), Field(name="createdAt", type="timestamp")),
                index_specs=(("userId", "createdAt"), ("userId", "createdAt")),
            ),
        )
    )

    assert len(derive_indexes(schema).indexes) == 3


def test_index_count_matches_owner_timestamp_product_plus_declared_specs() -> None:
    entities = (
        Entity(
            name="Shift",
            fields=(
                Field(name="userId"),
                Field(name="agentId"),
                Field(name="startedAt", type="timestamp"),
                Field(name="endedAt", type="timestamp"),
                Field(name="closedAt", type="timestamp"),
            ),
            index_specs=(("userId",),),
        ),
        Entity(name="Empty"),
        Entity(name="Invoice", index_specs=(("amount", "issuedAt"), ("status",))),
    )

    manifest = derive_indexes(SchemaModel(entities=entities))

    assert len(manifest.indexes) == (2 * 3 + 1) + 0 + (0 + 2)
    assert [index.collection_group for index in manifest.indexes][-2:] == ["invoices", "invoices"]


def test_serialized_manifest_has_firestore_shape() -> None:
    schema = SchemaModel(
        entities=(
            Entity(
                name="Comment",
                collection_name="ticket_comments",
                fields=(Field(name="userId"), Field(name="createdAt", type="timestamp")),
            ),
        )
    )

    text = serialize_index_manifest(derive_indexes(schema))

    assert json.loads(text) == {
        "indexes": [
            {
                "collectionGroup": "ticket_comments",
                "queryScope": "COLLECTION",
                "fields": [
                    {"fieldPath": "userId", "order": "ASCENDING"},
                    {"fieldPath": "createdAt", "order": "DESCENDING"},
                ],
            }
        ],
        "fieldOverrides": [],
    }
    assert text.startswith('{\n  "indexes": [\n')


def test_empty_schema_serializes_to_empty_manifest() -> None:
    assert serialize_index_manifest(derive_indexes(SchemaModel())) == (
        '{\n  "indexes": [],\n  "fieldOverrides": []\n}'
    )
