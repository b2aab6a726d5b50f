"""Schema loading service tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from schema_compiler.configuration.runtime_settings import SchemaConfig
from schema_compiler.schema_management.schema_loading import (
    SchemaError,
    build_schema_model,
    load_schema_document,
)
from schema_compiler.schema_management.schema_models import OwnershipTag


def _schema_config(text: str, source_path: Path | None = None) -> SchemaConfig:
    return SchemaConfig(text=text, source_path=source_path)


def test_sample_schema_loads_entities_and_roles_in_declaration_order() -> None:
    sample_path = Path(__file__).resolve().parents[3] / "samples" / "sample-schema.yaml"

    schema = load_schema_document(
        _schema_config(sample_path.read_text(encoding="utf-8"), sample_path)
    )

    assert [entity.name for entity in schema.entities] == ["User", "Ticket", "Comment", "Invoice"]
    assert [role.role for role in schema.roles] == ["admin", "agent"]
    ticket = schema.entities[1]
    assert [field.name for field in ticket.fields] == [
        "ownerId",
        "agentId",
        "title",
        "priority",
        "tags",
        "updatedAt",
    ]
    assert ticket.index_specs == (("priority", "updatedAt"),)
    assert ticket.relationships[0].target_entity == "User"
    assert ticket.relationships[0].via_field == "agentId"
    assert schema.entities[2].collection == "ticket_comments"
    assert schema.roles[1].description == "Support staff working the ticket queue"


def test_json_schema_with_canonical_key_spelling_is_accepted() -> None:
    text = """
{
  "entities": [
    {
      "name": "Order",
      "collectionName": "orders_v2",
      "fields": [
        {"name": "userId", "type": "reference", "required": true},
        {"name": "createdAt", "type": "timestamp"}
      ],
      "relationships": [
        {"type": "manyToOne", "targetEntity": "User", "viaField": "userId"}
      ],
      "indexSpecs": [["status", "createdAt"]]
    }
  ],
  "roles": [{"role": "admin", "permissions": ["all"]}]
}
"""

    schema = load_schema_document(_schema_config(text))

    order = schema.entities[0]
    assert order.collection == "orders_v2"
    assert order.fields[0].required is True
    assert order.relationships[0].type == "manyToOne"
    assert order.index_specs == (("status", "createdAt"),)
    assert schema.roles[0].permissions == ("all",)


def test_missing_sequences_default_to_empty() -> None:
    schema = build_schema_model({"dataModels": [{"name": "Invoice"}]})

    invoice = schema.entities[0]
    assert invoice.fields == ()
    assert invoice.relationships == ()
    assert invoice.index_specs == ()
    assert schema.roles == ()


def test_null_sequences_and_empty_document_are_treated_as_empty() -> None:
    schema = build_schema_model({"entities": [{"name": "Invoice", "fields": None}], "roles": None})

    assert schema.entities[0].fields == ()
    assert build_schema_model(None).entities == ()
    assert load_schema_document(_schema_config("")).entities == ()


def test_field_defaults_and_explicit_ownership_tag() -> None:
    schema = build_schema_model(
        {
            "entities": [
                {
                    "name": "Asset",
                    "fields": [
                        {"name": "title"},
                        {"name": "custodian", "ownership": "access_owner"},
                    ],
                }
            ]
        }
    )

    title, custodian = schema.entities[0].fields
    assert title.type == "text"
    assert title.required is False
    assert title.default is None
    assert title.ownership is None
    assert custodian.ownership is OwnershipTag.ACCESS_OWNER


def test_collection_name_defaults_to_lowercase_plural() -> None:
    schema = build_schema_model({"entities": [{"name": "SupportTicket", "collection": ""}]})

    assert schema.entities[0].collection == "supporttickets"


def test_unknown_ownership_tag_raises_schema_error() -> None:
    with pytest.raises(SchemaError, match="ownership must be one of"):
        build_schema_model(
            {"entities": [{"name": "A", "fields": [{"name": "x", "ownership": "boss"}]}]}
        )


def test_yaml_date_defaults_are_stored_as_iso_text() -> None:
    schema = load_schema_document(
        _schema_config(
            "entities:\n"
            "  - name: Shift\n"
            "    fields:\n"
            "      - name: startsOn\n"
            "        default: 2024-01-01\n"
            "      - name: window\n"
            "        default: {from: 2024-01-01, days: [1, 2]}\n"
        )
    )

    starts_on, window = schema.entities[0].fields
    assert starts_on.default == "2024-01-01"
    assert window.default == {"from": "2024-01-01", "days": [1, 2]}


@pytest.mark.parametrize("required", ["false", 1, "yes"])
def test_non_boolean_required_flag_raises_schema_error(required: object) -> None:
    with pytest.raises(SchemaError, match=r"fields\[0\]\.required must be a boolean"):
        build_schema_model(
            {"entities": [{"name": "A", "fields": [{"name": "x", "required": required}]}]}
        )


def test_missing_or_null_required_flag_means_optional() -> None:
    schema = build_schema_model(
        {"entities": [{"name": "A", "fields": [{"name": "x"}, {"name": "y", "required": None}]}]}
    )

    assert [field.required for field in schema.entities[0].fields] == [False, False]


def test_entity_without_name_raises_schema_error() -> None:
    with pytest.raises(SchemaError, match=r"entities\[0\] requires a name"):
        build_schema_model({"entities": [{"fields": []}]})


def test_non_list_fields_raise_schema_error() -> None:
    with pytest.raises(SchemaError, match="fields must be a list"):
        build_schema_model({"entities": [{"name": "A", "fields": "userId"}]})


def test_non_mapping_root_raises_schema_error() -> None:
    with pytest.raises(SchemaError, match="Schema root must be a mapping"):
        build_schema_model(["not", "a", "mapping"])


def test_invalid_schema_text_raises_schema_error() -> None:
    with pytest.raises(SchemaError):
        load_schema_document(_schema_config("entities: [unclosed"))
