"""Composite index manifest entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class IndexOrder(str, Enum):
    """Sort order of one indexed field."""

    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"


@dataclass(frozen=True)
class IndexField:
    """One field of a composite index."""

    field_path: str
    order: IndexOrder = IndexOrder.ASCENDING


@dataclass(frozen=True)
class CompositeIndex:
    """Multi-field index over one collection."""

    collection_group: str
    fields: tuple[IndexField, ...]
    query_scope: str = "COLLECTION"

    def to_document(self) -> dict[str, Any]:
        return {
            "collectionGroup": self.collection_group,
            "queryScope": self.query_scope,
            "fields": [
                {"fieldPath": field.field_path, "order": field.order.value}
                for field in self.fields
            ],
        }


@dataclass(frozen=True)
class IndexManifest:
    """Ordered composite indexes plus the reserved field overrides list."""

    indexes: tuple[CompositeIndex, ...] = ()
    field_overrides: tuple[Any, ...] = ()

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-ready manifest mapping."""
        return {
            "indexes": [index.to_document() for index in self.indexes],
            "fieldOverrides": list(self.field_overrides),
        }
