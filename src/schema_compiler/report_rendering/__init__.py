"""Report rendering exports."""

from .report_builder import build_report, relationship_arrow
from .report_encoders import (
    ReportFormatError,
    render_report,
    render_text,
    serialize_structured_record,
    to_structured_record,
)
from .report_models import (
    CapacityRow,
    CollectionAccess,
    EntityBreakdown,
    RelationshipSummary,
    ReportFormat,
    ReportOverview,
    SchemaReport,
    SecuritySummary,
)
from .report_workbook_writer import write_report_workbook

__all__ = [
    "CapacityRow",
    "CollectionAccess",
    "EntityBreakdown",
    "RelationshipSummary",
    "ReportFormat",
    "ReportOverview",
    "SchemaReport",
    "SecuritySummary",
    "ReportFormatError",
    "build_report",
    "relationship_arrow",
    "render_report",
    "render_text",
    "serialize_structured_record",
    "to_structured_record",
    "write_report_workbook",
]
