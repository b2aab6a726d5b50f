"""Structural validation of a schema model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .schema_models import SchemaModel


class ViolationCode(str, Enum):
    """Kinds of schema violations reported before compilation."""

    EMPTY_ENTITY_NAME = "EMPTY_ENTITY_NAME"
    EMPTY_FIELD_NAME = "EMPTY_FIELD_NAME"
    DUPLICATE_FIELD_NAME = "DUPLICATE_FIELD_NAME"
    EMPTY_INDEX_SPEC = "EMPTY_INDEX_SPEC"
    DUPLICATE_COLLECTION = "DUPLICATE_COLLECTION"


@dataclass(frozen=True)
class SchemaViolation:
    """One problem found in the schema model."""

    code: ViolationCode
    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.code.value} at {self.location}: {self.message}"


def validate_schema(schema: SchemaModel) -> tuple[SchemaViolation, ...]:
    """Return every violation in declaration order; empty when the schema is valid."""
    violations: list[SchemaViolation] = []
    seen_collections: dict[str, str] = {}

    for entity_index, entity in enumerate(schema.entities):
        location = f"entities[{entity_index}]"
        if not entity.name.strip():
            violations.append(
                SchemaViolation(
                    code=ViolationCode.EMPTY_ENTITY_NAME,
                    location=location,
                    message="Entity name must not be empty.",
                )
            )
        else:
            collection = entity.collection
            if collection in seen_collections:
                violations.append(
                    SchemaViolation(
                        code=ViolationCode.DUPLICATE_COLLECTION,
                        location=location,
                        message=(
                            f"Collection '{collection}' is already used by "
                            f"{seen_collections[collection]}."
                        ),
                    )
                )
            else:
                seen_collections[collection] = entity.name

        label = entity.name or location
        seen_fields: set[str] = set()
        for field_index, field in enumerate(entity.fields):
            field_location = f"{location}.fields[{field_index}]"
            if not field.name.strip():
                violations.append(
                    SchemaViolation(
                        code=ViolationCode.EMPTY_FIELD_NAME,
                        location=field_location,
                        message=f"{label}: field name must not be empty.",
                    )
                )
                continue
            if field.name in seen_fields:
                violations.append(
                    SchemaViolation(
                        code=ViolationCode.DUPLICATE_FIELD_NAME,
                        location=field_location,
                        message=f"{label}: field '{field.name}' is declared more than once.",
                    )
                )
            seen_fields.add(field.name)

        for spec_index, index_spec in enumerate(entity.index_specs):
            if not index_spec:
                violations.append(
                    SchemaViolation(
                        code=ViolationCode.EMPTY_INDEX_SPEC,
                        location=f"{location}.indexSpecs[{spec_index}]",
                        message=f"{label}: composite index must list at least one field.",
                    )
                )

    return tuple(violations)
