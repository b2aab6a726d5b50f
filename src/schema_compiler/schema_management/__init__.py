"""Schema management exports."""

from .field_classification import (
    ClassifiedField,
    classify_fields,
    classify_ownership,
    default_ownership,
    grants_access_ownership,
    grants_index_ownership,
)
from .schema_loading import SchemaError, build_schema_model, load_schema_document
from .schema_models import (
    Entity,
    Field,
    FieldType,
    OwnershipTag,
    Relationship,
    RelationshipType,
    Role,
    SchemaModel,
)
from .schema_validation import SchemaViolation, ViolationCode, validate_schema

__all__ = [
    "Entity",
    "Field",
    "FieldType",
    "OwnershipTag",
    "Relationship",
    "RelationshipType",
    "Role",
    "SchemaModel",
    "ClassifiedField",
    "classify_fields",
    "classify_ownership",
    "default_ownership",
    "grants_access_ownership",
    "grants_index_ownership",
    "SchemaError",
    "build_schema_model",
    "load_schema_document",
    "SchemaViolation",
    "ViolationCode",
    "validate_schema",
]
