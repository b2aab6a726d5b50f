"""Structured and text encodings of the schema report."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from schema_compiler.capacity_estimation.capacity_estimator import (
    format_doc_size,
    format_free_tier,
)
from schema_compiler.schema_management.schema_models import Field, SchemaModel

from .report_builder import build_report
from .report_models import ReportFormat, SchemaReport

PAGE_BREAK = "\n---\n\n"
FREE_TIER_NOTE = "Firebase Free Tier: 1GB storage, 50K reads/day, 20K writes/day"


class ReportFormatError(ValueError):
    """Raised for report formats that cannot be rendered in memory."""


def render_report(schema: SchemaModel, report_format: ReportFormat | str) -> dict[str, Any] | str:
    """Render a schema report as a structured record or as Markdown text."""
    resolved = _resolve_format(report_format)
    report = build_report(schema)
    if resolved is ReportFormat.STRUCTURED:
        return to_structured_record(report)
    return render_text(report)


def _resolve_format(report_format: ReportFormat | str) -> ReportFormat:
    try:
        resolved = ReportFormat(report_format)
    except ValueError as exc:
        raise ReportFormatError(f"Unsupported report format: {report_format}") from exc
    if resolved is ReportFormat.WORKBOOK:
        raise ReportFormatError("Workbook reports can only be exported to a file.")
    return resolved


def to_structured_record(report: SchemaReport) -> dict[str, Any]:
    """Return a JSON-ready record of the report."""
    overview = report.overview
    return {
        "overview": {
            "collections": overview.collections,
            "totalFields": overview.total_fields,
            "relationships": overview.relationships,
            "indexes": overview.indexes,
            "roles": overview.roles,
        },
        "collections": [
            {
                "name": entity.collection,
                "model": entity.model,
                "fieldCount": len(entity.fields),
                "fields": [_field_record(field) for field in entity.fields],
                "relationships": [
                    {
                        "type": relationship.type,
                        "targetEntity": relationship.target_entity,
                        "viaField": relationship.via_field,
                        "arrow": relationship.arrow,
                    }
                    for relationship in entity.relationships
                ],
                "indexes": [list(index_spec) for index_spec in entity.index_specs],
            }
            for entity in report.entities
        ],
        "security": {
            "roles": [
                {
                    "role": role.role,
                    "permissions": list(role.permissions),
                    "description": role.description,
                }
                for role in report.security.roles
            ],
            "rules": [
                {
                    "collection": access.collection,
                    "policy": access.policy.value,
                    "ownerField": access.owner_field,
                    "read": access.read,
                    "create": access.create,
                    "update": access.update,
                    "delete": access.delete,
                }
                for access in report.security.collections
            ],
        },
        "capacity": [
            {
                "collection": row.collection,
                "estimatedDocBytes": row.estimate.estimated_doc_bytes,
                "freeTierDocCount": row.estimate.free_tier_doc_count,
                "sizeClass": row.estimate.size_class.value,
                "notes": row.estimate.size_class.note,
            }
            for row in report.capacity
        ],
    }


def serialize_structured_record(report: SchemaReport) -> str:
    """Render the structured record as indented JSON text."""
    return json.dumps(to_structured_record(report), indent=2, ensure_ascii=False)


def _field_record(field: Field) -> dict[str, Any]:
    return {
        "name": field.name,
        "type": field.type,
        "required": field.required,
        "default": field.default,
    }


def render_text(report: SchemaReport) -> str:
    """Render the report as a Markdown document, one page per section."""
    pages = [
        _overview_page(report),
        _entities_page(report),
        _relationships_page(report),
        _security_page(report),
        _indexes_page(report),
        _capacity_page(report),
    ]
    return "# Database Structure Preview\n" + PAGE_BREAK + PAGE_BREAK.join(pages)


def _overview_page(report: SchemaReport) -> str:
    overview = report.overview
    return (
        "## Overview\n\n"
        f"- **Collections:** {overview.collections}\n"
        f"- **Total Fields:** {overview.total_fields}\n"
        f"- **Relationships:** {overview.relationships}\n"
        f"- **Indexes:** {overview.indexes}\n"
        f"- **User Roles:** {overview.roles}\n"
    )


def _entities_page(report: SchemaReport) -> str:
    lines = ["## Collections & Fields", ""]
    if not report.entities:
        lines.extend(["_No data models defined yet._", ""])
    for position, entity in enumerate(report.entities, start=1):
        lines.extend(
            [f"### {position}. {entity.collection}/", "", f"**Model:** {entity.model}", ""]
        )
        if not entity.fields:
            lines.extend(["_No fields defined_", ""])
            continue
        lines.extend(
            _table(
                ("Field", "Type", "Required", "Default"),
                [
                    (
                        field.name,
                        field.type,
                        "✓" if field.required else "",
                        _format_default(field.default),
                    )
                    for field in entity.fields
                ],
            )
        )
        lines.append("")
    return "\n".join(lines)


def _relationships_page(report: SchemaReport) -> str:
    lines = ["## Relationships", ""]
    related = [entity for entity in report.entities if entity.relationships]
    if not related:
        lines.extend(["_No relationships defined_", ""])
    for entity in related:
        lines.extend([f"### {entity.model}", ""])
        lines.extend(
            f"- `{relationship.arrow}` {relationship.type} with `{relationship.target_entity}` "
            f"via `{relationship.via_field}`"
            for relationship in entity.relationships
        )
        lines.append("")
    return "\n".join(lines)


def _security_page(report: SchemaReport) -> str:
    lines = ["## Security Rules", ""]
    if report.security.roles:
        lines.extend(["**User Roles:**", ""])
        lines.extend(
            f"- **{role.role}**: {', '.join(role.permissions) or 'standard permissions'}"
            for role in report.security.roles
        )
    else:
        lines.append("_No user roles defined._")
    lines.append("")
    if report.security.collections:
        lines.extend(
            _table(
                ("Collection", "Policy", "Read", "Create", "Update", "Delete"),
                [
                    (
                        access.collection,
                        access.policy.value,
                        access.read,
                        access.create,
                        access.update,
                        access.delete,
                    )
                    for access in report.security.collections
                ],
            )
        )
        lines.append("")
    return "\n".join(lines)


def _indexes_page(report: SchemaReport) -> str:
    lines = ["## Indexes", ""]
    indexed = [entity for entity in report.entities if entity.index_specs]
    if not indexed:
        lines.extend(["_No composite indexes defined (auto-indexes will be used)_", ""])
    for entity in indexed:
        lines.extend([f"### {entity.collection}", ""])
        lines.extend(
            f"{position}. Composite: [{', '.join(index_spec)}]"
            for position, index_spec in enumerate(entity.index_specs, start=1)
        )
        lines.append("")
    return "\n".join(lines)


def _capacity_page(report: SchemaReport) -> str:
    lines = ["## Storage Estimates", ""]
    if report.capacity:
        lines.extend(
            _table(
                ("Collection", "Est. Doc Size", "Free Tier", "Notes"),
                [
                    (
                        row.collection,
                        format_doc_size(row.estimate.estimated_doc_bytes),
                        format_free_tier(row.estimate.free_tier_doc_count),
                        row.estimate.size_class.note,
                    )
                    for row in report.capacity
                ],
            )
        )
        lines.append("")
    lines.extend([FREE_TIER_NOTE, ""])
    return "\n".join(lines)


def _table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> list[str]:
    lines = [_table_row(header), _table_row(["---"] * len(header))]
    lines.extend(_table_row(row) for row in rows)
    return lines


def _table_row(cells: Sequence[str]) -> str:
    escaped = [str(cell).replace("|", "\\|") for cell in cells]
    return "| " + " | ".join(escaped) + " |"


def _format_default(value: Any) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, sort_keys=True)
