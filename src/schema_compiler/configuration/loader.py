"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    Configuration,
    OutputSettings,
    ReportSettings,
    SchemaConfig,
    ValidationSettings,
)

REPORT_FORMATS: tuple[str, ...] = ("structured", "text", "xlsx")
REQUIRED_PLACEHOLDER = "<REQUIRED>"


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    return Configuration(
        path=path,
        schema=_parse_schema_section(parsed.get("schema"), base_path),
        output=_parse_output_section(parsed.get("output"), base_path),
        report=_parse_report_section(parsed.get("report"), base_path),
        validation=_parse_validation_section(parsed.get("validation")),
    )


def _parse_schema_section(value: Any, base_path: Path) -> SchemaConfig:
    section = _require_mapping(value, "schema")
    inline = section.get("inline")
    path_value = section.get("path")
    if inline and path_value:
        raise ConfigurationError("Schema definition must not set both inline and path.")
    if inline:
        text = inline if isinstance(inline, str) else yaml.safe_dump(inline, sort_keys=False)
        return SchemaConfig(text=text, source_path=None)
    if path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError("schema.path must be a string.")
        if path_value.strip() == REQUIRED_PLACEHOLDER:
            raise ConfigurationError("schema.path still contains the <REQUIRED> placeholder.")
        schema_path = _resolve_path(base_path, path_value)
        if not schema_path.exists():
            raise ConfigurationError(f"Schema file not found: {schema_path}")
        text = schema_path.read_text(encoding="utf-8")
        if not text.strip():
            raise ConfigurationError("Schema text cannot be empty.")
        return SchemaConfig(text=text, source_path=schema_path)
    raise ConfigurationError("Schema definition requires either inline or path.")


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = _optional_mapping(value, "output")
    directory_value = _optional_string(section.get("directory"), "output.directory")
    directory = _resolve_path(base_path, directory_value) if directory_value else base_path
    return OutputSettings(
        directory=directory,
        firestore_rules=_file_name(
            section.get("firestore_rules", "firestore.rules"), "output.firestore_rules"
        ),
        storage_rules=_file_name(
            section.get("storage_rules", "storage.rules"), "output.storage_rules"
        ),
        indexes=_file_name(section.get("indexes", "firestore.indexes.json"), "output.indexes"),
    )


def _parse_report_section(value: Any, base_path: Path) -> ReportSettings:
    section = _optional_mapping(value, "report")
    report_format = _require_non_empty_string(
        section.get("format", "text"), "report.format"
    ).lower()
    if report_format not in REPORT_FORMATS:
        allowed = ", ".join(REPORT_FORMATS)
        raise ConfigurationError(f"report.format must be one of: {allowed}.")
    path_value = _optional_string(section.get("path"), "report.path")
    return ReportSettings(
        format=report_format,
        path=_resolve_path(base_path, path_value) if path_value else None,
    )


def _parse_validation_section(value: Any) -> ValidationSettings:
    section = _optional_mapping(value, "validation")
    fail_on_violations = section.get("fail_on_violations", True)
    if not isinstance(fail_on_violations, bool):
        raise ConfigurationError("validation.fail_on_violations must be a boolean.")
    return ValidationSettings(fail_on_violations=fail_on_violations)


def _file_name(value: Any, field_name: str) -> str:
    name = _require_non_empty_string(value, field_name)
    if Path(name).is_absolute():
        raise ConfigurationError(f"{field_name} must be relative to output.directory.")
    return name


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None
