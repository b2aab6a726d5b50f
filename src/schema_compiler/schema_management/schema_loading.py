"""Schema loading service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

import yaml

from schema_compiler.configuration.runtime_settings import SchemaConfig

from .schema_models import Entity, Field, OwnershipTag, Relationship, Role, SchemaModel


class SchemaError(Exception):
    """Raised for schema parsing failures."""


def load_schema_document(config: SchemaConfig) -> SchemaModel:
    """Parse schema text (YAML or JSON) into a schema model."""
    try:
        root = yaml.safe_load(config.text)
    except yaml.YAMLError as exc:
        raise SchemaError(f"Invalid schema document: {exc}") from exc
    return build_schema_model(root)


def build_schema_model(root: Any) -> SchemaModel:
    """Build a schema model from already-parsed mappings and lists."""
    if root is None:
        root = {}
    if not isinstance(root, Mapping):
        raise SchemaError("Schema root must be a mapping.")

    raw_entities = _sequence(_first_present(root, "entities", "dataModels"), "entities")
    raw_roles = _sequence(_first_present(root, "roles", "userRoles"), "roles")
    entities = tuple(
        _parse_entity(item, f"entities[{index}]") for index, item in enumerate(raw_entities)
    )
    roles = tuple(_parse_role(item, f"roles[{index}]") for index, item in enumerate(raw_roles))
    return SchemaModel(entities=entities, roles=roles)


def _parse_entity(value: Any, location: str) -> Entity:
    node = _mapping(value, location)
    if "name" not in node:
        raise SchemaError(f"{location} requires a name.")
    name = _string(node["name"], f"{location}.name")
    collection_name = _optional_string(
        _first_present(node, "collectionName", "collection"), f"{location}.collectionName"
    )
    fields = tuple(
        _parse_field(item, f"{location}.fields[{index}]")
        for index, item in enumerate(_sequence(node.get("fields"), f"{location}.fields"))
    )
    relationships = tuple(
        _parse_relationship(item, f"{location}.relationships[{index}]")
        for index, item in enumerate(
            _sequence(node.get("relationships"), f"{location}.relationships")
        )
    )
    index_specs = tuple(
        _parse_index_spec(item, f"{location}.indexSpecs[{index}]")
        for index, item in enumerate(
            _sequence(_first_present(node, "indexSpecs", "indexes"), f"{location}.indexSpecs")
        )
    )
    return Entity(
        name=name,
        collection_name=collection_name,
        fields=fields,
        relationships=relationships,
        index_specs=index_specs,
    )


def _parse_field(value: Any, location: str) -> Field:
    node = _mapping(value, location)
    if "name" not in node:
        raise SchemaError(f"{location} requires a name.")
    field_type = node.get("type")
    return Field(
        name=_string(node["name"], f"{location}.name"),
        type="text" if field_type is None else _string(field_type, f"{location}.type"),
        required=_boolean(node.get("required", False), f"{location}.required"),
        default=_json_value(node.get("default"), f"{location}.default"),
        ownership=_parse_ownership(node.get("ownership"), f"{location}.ownership"),
    )


def _parse_ownership(value: Any, location: str) -> OwnershipTag | None:
    if value is None:
        return None
    try:
        return OwnershipTag(value)
    except ValueError as exc:
        allowed = ", ".join(tag.value for tag in OwnershipTag)
        raise SchemaError(f"{location} must be one of: {allowed}.") from exc


def _parse_relationship(value: Any, location: str) -> Relationship:
    node = _mapping(value, location)
    return Relationship(
        type=_string(node.get("type", ""), f"{location}.type"),
        target_entity=_string(
            _first_present(node, "targetEntity", "model") or "", f"{location}.targetEntity"
        ),
        via_field=_string(_first_present(node, "viaField", "field") or "", f"{location}.viaField"),
    )


def _parse_index_spec(value: Any, location: str) -> tuple[str, ...]:
    items = _sequence(value, location)
    return tuple(_string(item, f"{location}[{index}]") for index, item in enumerate(items))


def _parse_role(value: Any, location: str) -> Role:
    node = _mapping(value, location)
    permissions = _sequence(node.get("permissions"), f"{location}.permissions")
    return Role(
        role=_string(node.get("role", ""), f"{location}.role"),
        permissions=tuple(
            _string(item, f"{location}.permissions[{index}]")
            for index, item in enumerate(permissions)
        ),
        description=_optional_string(node.get("description"), f"{location}.description"),
    )


def _first_present(node: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if node.get(key) is not None:
            return node[key]
    return None


def _mapping(value: Any, location: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SchemaError(f"{location} must be a mapping.")
    return value


def _sequence(value: Any, location: str) -> Sequence[Any]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise SchemaError(f"{location} must be a list.")
    return value


def _string(value: Any, location: str) -> str:
    if isinstance(value, bool) or not isinstance(value, str | int | float):
        raise SchemaError(f"{location} must be a string.")
    return str(value)


def _optional_string(value: Any, location: str) -> str | None:
    if value is None:
        return None
    return _string(value, location)


def _boolean(value: Any, location: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise SchemaError(f"{location} must be a boolean.")
    return value


def _json_value(value: Any, location: str) -> Any:
    """Return ``value`` with YAML-only scalars such as dates rendered as ISO text."""
    if value is None or isinstance(value, bool | int | float | str):
        return value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {
            str(key): _json_value(item, f"{location}.{key}") for key, item in value.items()
        }
    if isinstance(value, Sequence) and not isinstance(value, bytes | bytearray):
        return [_json_value(item, f"{location}[{index}]") for index, item in enumerate(value)]
    raise SchemaError(f"{location} must be a JSON value.")
