"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from schema_compiler.artifact_writing.artifact_writer import WrittenArtifacts
from schema_compiler.configuration.runtime_settings import Configuration
from schema_compiler.schema_management.schema_models import SchemaModel
from schema_compiler.schema_management.schema_validation import SchemaViolation


@dataclass(frozen=True)
class CompileRequest:
    """Input contract for one compilation run."""

    config_path: str
    output_dir: str | None = None
    export_report: bool = True


@dataclass(frozen=True)
class CompileOutcome:
    """Output contract for one completed compilation run."""

    artifacts: WrittenArtifacts
    report_path: Path | None
    violations: tuple[SchemaViolation, ...]


@dataclass(frozen=True)
class ReportRequest:
    """Input contract for rendering or exporting a report."""

    config_path: str
    report_format: str | None = None
    output_path: str | None = None


@dataclass(frozen=True)
class ReportOutcome:
    """Rendered report content, or the path it was exported to."""

    content: str | None
    output_path: Path | None


@dataclass(frozen=True)
class LoadedSchema:
    """Configuration and schema model loaded for one run."""

    configuration: Configuration
    schema: SchemaModel
