"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SchemaConfig:
    """Normalized schema source."""

    text: str
    source_path: Path | None


@dataclass(frozen=True)
class OutputSettings:
    """Destination paths of the compiled artifacts."""

    directory: Path
    firestore_rules: str = "firestore.rules"
    storage_rules: str = "storage.rules"
    indexes: str = "firestore.indexes.json"

    @property
    def firestore_rules_path(self) -> Path:
        return self.directory / self.firestore_rules

    @property
    def storage_rules_path(self) -> Path:
        return self.directory / self.storage_rules

    @property
    def indexes_path(self) -> Path:
        return self.directory / self.indexes


@dataclass(frozen=True)
class ReportSettings:
    """Report export preferences."""

    format: str
    path: Path | None


@dataclass(frozen=True)
class ValidationSettings:
    """Schema validation behavior."""

    fail_on_violations: bool


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    schema: SchemaConfig
    output: OutputSettings
    report: ReportSettings
    validation: ValidationSettings
