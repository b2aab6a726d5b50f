"""Report encoding tests."""

from __future__ import annotations

import json

import pytest
import yaml
from schema_compiler.report_rendering.report_builder import build_report
from schema_compiler.report_rendering.report_encoders import (
    ReportFormatError,
    render_report,
    render_text,
    serialize_structured_record,
    to_structured_record,
)
from schema_compiler.schema_management.schema_loading import build_schema_model
from schema_compiler.schema_management.schema_models import (
    Entity,
    Field,
    Relationship,
    Role,
    SchemaModel,
)


def _ticket_schema() -> SchemaModel:
    return SchemaModel(
        entities=(
            Entity(
                name="Ticket",
                fields=(
                    Field(name="ownerId", type="reference", required=True),
                    Field(name="priority", type="number", default=3),
                    Field(name="updatedAt", type="timestamp"),
                ),
                relationships=(
                    Relationship(type="oneToMany", target_entity="Comment", via_field="ticketId"),
                ),
                index_specs=(("priority", "updatedAt"),),
            ),
            Entity(name="Invoice"),
        ),
        roles=(Role(role="admin", permissions=("read", "write")), Role(role="agent")),
    )


def test_structured_record_contains_every_section() -> None:
    record = render_report(_ticket_schema(), "structured")

    assert isinstance(record, dict)
    assert record["overview"] == {
        "collections": 2,
        "totalFields": 3,
        "relationships": 1,
        "indexes": 1,
        "roles": 2,
    }
    ticket = record["collections"][0]
    assert ticket["name"] == "tickets"
    assert ticket["fieldCount"] == 3
    assert ticket["fields"][1] == {
        "name": "priority",
        "type": "number",
        "required": False,
        "default": 3,
    }
    assert ticket["relationships"] == [
        {"type": "oneToMany", "targetEntity": "Comment", "viaField": "ticketId", "arrow": "→ *"}
    ]
    assert ticket["indexes"] == [["priority", "updatedAt"]]
    assert record["security"]["rules"][0]["policy"] == "ownership"
    assert record["security"]["rules"][0]["ownerField"] == "ownerId"
    assert record["security"]["rules"][1]["policy"] == "default"
    assert record["security"]["roles"][1] == {
        "role": "agent",
        "permissions": [],
        "description": None,
    }
    assert record["capacity"][0] == {
        "collection": "tickets",
        "estimatedDocBytes": 150,
        "freeTierDocCount": 7158278,
        "sizeClass": "typical",
        "notes": "Typical size",
    }
    assert record["capacity"][1]["freeTierDocCount"] is None


def test_structured_record_round_trips_through_json() -> None:
    schema = _ticket_schema()

    first = serialize_structured_record(build_report(schema))
    second = serialize_structured_record(build_report(schema))

    assert first == second
    assert json.loads(first) == to_structured_record(build_report(schema))


def test_text_sections_appear_in_fixed_order() -> None:
    text = render_report(_ticket_schema(), "text")

    assert isinstance(text, str)
    headings = [
        "## Overview",
        "## Collections & Fields",
        "## Relationships",
        "## Security Rules",
        "## Indexes",
        "## Storage Estimates",
    ]
    positions = [text.index(heading) for heading in headings]
    assert positions == sorted(positions)
    assert text.startswith("# Database Structure Preview\n")
    assert text.count("\n---\n") == len(headings)


def test_text_renders_tables_and_annotations() -> None:
    text = render_text(build_report(_ticket_schema()))

    assert "- **Collections:** 2\n" in text
    assert "### 1. tickets/" in text
    assert "| Field | Type | Required | Default |" in text
    assert "| ownerId | reference | ✓ | - |" in text
    assert "| priority | number |  | 3 |" in text
    assert "_No fields defined_" in text
    assert "- `→ *` oneToMany with `Comment` via `ticketId`" in text
    assert "- **admin**: read, write" in text
    assert "- **agent**: standard permissions" in text
    assert "| tickets | ownership | Authenticated | Authenticated | Owner + Admin |" in text
    assert "1. Composite: [priority, updatedAt]" in text
    assert "| tickets | ~150B | 7.2M docs | Typical size |" in text
    assert "| invoices | ~0B | unbounded | Typical size |" in text


def test_text_for_empty_schema_reports_missing_sections() -> None:
    text = render_report(SchemaModel(), "text")

    assert "_No data models defined yet._" in text
    assert "_No relationships defined_" in text
    assert "_No user roles defined._" in text
    assert "_No composite indexes defined (auto-indexes will be used)_" in text


def test_text_rendering_is_deterministic() -> None:
    schema = _ticket_schema()

    assert render_report(schema, "text") == render_report(schema, "text")


def test_table_cells_escape_pipes() -> None:
    schema = SchemaModel(
        entities=(Entity(name="Flag", fields=(Field(name="mode", default="a|b"),)),)
    )

    assert "| mode | text |  | a\\|b |" in render_report(schema, "text")


_DEFAULT_CASES = [
    ("false", "false", False),
    ("0", "0", 0),
    ("{b: 2, a: 1}", '{"a": 1, "b": 2}', {"a": 1, "b": 2}),
    ("[x, 1]", '["x", 1]', ["x", 1]),
    ("2024-01-01", "2024-01-01", "2024-01-01"),
    ("2024-01-01 10:30:00", "2024-01-01T10:30:00", "2024-01-01T10:30:00"),
]


def _schema_with_default(default_text: str) -> SchemaModel:
    document = yaml.safe_load(
        "entities:\n"
        "  - name: Shift\n"
        "    fields:\n"
        "      - name: start\n"
        f"        default: {default_text}\n"
    )
    return build_schema_model(document)


@pytest.mark.parametrize(("default_text", "cell", "value"), _DEFAULT_CASES)
def test_non_string_defaults_render_as_json(default_text: str, cell: str, value: object) -> None:
    report = build_report(_schema_with_default(default_text))

    text = render_text(report)
    record = json.loads(serialize_structured_record(report))

    assert f"| start | text |  | {cell} |" in text
    assert record["collections"][0]["fields"][0]["default"] == value


@pytest.mark.parametrize("report_format", ["xlsx", "html"])
def test_unsupported_in_memory_formats_raise(report_format: str) -> None:
    with pytest.raises(ReportFormatError):
        render_report(_ticket_schema(), report_format)
