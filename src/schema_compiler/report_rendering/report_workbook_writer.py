"""Excel export of the schema report."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from schema_compiler.capacity_estimation.capacity_estimator import (
    format_doc_size,
    format_free_tier,
)

from .report_models import SchemaReport

OVERVIEW_SHEET_NAME = "Overview"
ENTITIES_SHEET_NAME = "Entities"
RELATIONSHIPS_SHEET_NAME = "Relationships"
ROLES_SHEET_NAME = "Roles"
SECURITY_SHEET_NAME = "Security"
INDEXES_SHEET_NAME = "Indexes"
CAPACITY_SHEET_NAME = "Capacity"


def write_report_workbook(report: SchemaReport, output_path: Path | str) -> Path:
    """Write one sheet per report section and return the resolved path."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = OVERVIEW_SHEET_NAME
    _write_overview_sheet(sheet, report)

    _write_table_sheet(
        workbook.create_sheet(ENTITIES_SHEET_NAME),
        ("Collection", "Model", "Field", "Type", "Required", "Default"),
        [
            (
                entity.collection,
                entity.model,
                field.name,
                field.type,
                field.required,
                _cell_value(field.default),
            )
            for entity in report.entities
            for field in entity.fields
        ],
    )
    _write_table_sheet(
        workbook.create_sheet(RELATIONSHIPS_SHEET_NAME),
        ("Model", "Type", "Arrow", "Target", "Via Field"),
        [
            (
                entity.model,
                relationship.type,
                relationship.arrow,
                relationship.target_entity,
                relationship.via_field,
            )
            for entity in report.entities
            for relationship in entity.relationships
        ],
    )
    _write_table_sheet(
        workbook.create_sheet(ROLES_SHEET_NAME),
        ("Role", "Permissions", "Description"),
        [
            (role.role, ", ".join(role.permissions), role.description)
            for role in report.security.roles
        ],
    )
    _write_table_sheet(
        workbook.create_sheet(SECURITY_SHEET_NAME),
        ("Collection", "Policy", "Owner Field", "Read", "Create", "Update", "Delete"),
        [
            (
                access.collection,
                access.policy.value,
                access.owner_field,
                access.read,
                access.create,
                access.update,
                access.delete,
            )
            for access in report.security.collections
        ],
    )
    _write_table_sheet(
        workbook.create_sheet(INDEXES_SHEET_NAME),
        ("Collection", "Index", "Fields"),
        [
            (entity.collection, position, ", ".join(index_spec))
            for entity in report.entities
            for position, index_spec in enumerate(entity.index_specs, start=1)
        ],
    )
    _write_table_sheet(
        workbook.create_sheet(CAPACITY_SHEET_NAME),
        ("Collection", "Est. Doc Bytes", "Est. Doc Size", "Free Tier Docs", "Free Tier", "Notes"),
        [
            (
                row.collection,
                row.estimate.estimated_doc_bytes,
                format_doc_size(row.estimate.estimated_doc_bytes),
                row.estimate.free_tier_doc_count,
                format_free_tier(row.estimate.free_tier_doc_count),
                row.estimate.size_class.note,
            )
            for row in report.capacity
        ],
    )

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_overview_sheet(sheet, report: SchemaReport) -> None:
    overview = report.overview
    entries = (
        ("collections", overview.collections),
        ("total_fields", overview.total_fields),
        ("relationships", overview.relationships),
        ("indexes", overview.indexes),
        ("roles", overview.roles),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
    sheet.column_dimensions["A"].width = 16


def _write_table_sheet(sheet, header: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    for column_index, name in enumerate(header, start=1):
        sheet.cell(row=1, column=column_index, value=name)
        sheet.cell(row=1, column=column_index).style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )
    for row_index, values in enumerate(rows, start=2):
        for column_index, value in enumerate(values, start=1):
            sheet.cell(row=row_index, column=column_index, value=value)


def _cell_value(value: Any) -> Any:
    if isinstance(value, dict | list):
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    return value
