"""Capacity estimation exports."""

from .capacity_estimator import (
    BYTES_PER_FIELD,
    FREE_TIER_BYTES,
    CapacityEstimate,
    SizeClass,
    estimate_capacity,
    format_doc_size,
    format_free_tier,
)

__all__ = [
    "BYTES_PER_FIELD",
    "FREE_TIER_BYTES",
    "CapacityEstimate",
    "SizeClass",
    "estimate_capacity",
    "format_doc_size",
    "format_free_tier",
]
