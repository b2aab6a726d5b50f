"""Per-entity storage capacity estimates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from schema_compiler.schema_management.schema_models import Entity, FieldType

BYTES_PER_FIELD = 50
FREE_TIER_BYTES = 1024 * 1024 * 1024
LARGE_DOCUMENT_FIELD_COUNT = 20

_NESTED_TYPES = frozenset({FieldType.ARRAY.value, FieldType.OBJECT.value})


class SizeClass(str, Enum):
    """Coarse document size classification."""

    TYPICAL = "typical"
    LARGE = "large"
    MAY_BE_LARGER = "may-be-larger"

    @property
    def note(self) -> str:
        return _SIZE_CLASS_NOTES[self]


_SIZE_CLASS_NOTES = {
    SizeClass.TYPICAL: "Typical size",
    SizeClass.LARGE: "Large document",
    SizeClass.MAY_BE_LARGER: "May be larger (arrays/objects)",
}


@dataclass(frozen=True)
class CapacityEstimate:
    """Projected document size and free-tier document count.

    ``free_tier_doc_count`` is ``None`` for entities without fields: their
    estimated size is zero, so the allowance holds an unbounded number of them.
    """

    estimated_doc_bytes: int
    free_tier_doc_count: int | None
    size_class: SizeClass


def estimate_capacity(entity: Entity) -> CapacityEstimate:
    """Estimate document size and free-tier capacity for one entity."""
    field_count = len(entity.fields)
    estimated_doc_bytes = field_count * BYTES_PER_FIELD
    free_tier_doc_count = (
        FREE_TIER_BYTES // estimated_doc_bytes if estimated_doc_bytes > 0 else None
    )
    return CapacityEstimate(
        estimated_doc_bytes=estimated_doc_bytes,
        free_tier_doc_count=free_tier_doc_count,
        size_class=_classify_size(entity, field_count),
    )


def _classify_size(entity: Entity, field_count: int) -> SizeClass:
    if any(field.type in _NESTED_TYPES for field in entity.fields):
        return SizeClass.MAY_BE_LARGER
    if field_count > LARGE_DOCUMENT_FIELD_COUNT:
        return SizeClass.LARGE
    return SizeClass.TYPICAL


def format_doc_size(estimated_doc_bytes: int) -> str:
    """Render a byte estimate as ``~NB`` or ``~N.NKB``."""
    if estimated_doc_bytes < 1024:
        return f"~{estimated_doc_bytes}B"
    return f"~{estimated_doc_bytes / 1024:.1f}KB"


def format_free_tier(free_tier_doc_count: int | None) -> str:
    """Render a free-tier document count in thousands or millions."""
    if free_tier_doc_count is None:
        return "unbounded"
    if free_tier_doc_count > 1_000_000:
        return f"{free_tier_doc_count / 1_000_000:.1f}M docs"
    return f"{free_tier_doc_count / 1000:.0f}K docs"
