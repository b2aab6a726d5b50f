"""Index derivation exports."""

from .index_deriver import derive_indexes, serialize_index_manifest
from .index_models import CompositeIndex, IndexField, IndexManifest, IndexOrder

__all__ = [
    "CompositeIndex",
    "IndexField",
    "IndexManifest",
    "IndexOrder",
    "derive_indexes",
    "serialize_index_manifest",
]
