"""Compilation run use-case service."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from schema_compiler.access_rules import compile_rules
from schema_compiler.artifact_writing import ArtifactWriteError, write_artifacts, write_report
from schema_compiler.configuration import ConfigurationError, load_configuration
from schema_compiler.index_derivation import derive_indexes
from schema_compiler.report_rendering import (
    ReportFormat,
    ReportFormatError,
    build_report,
    render_text,
    serialize_structured_record,
)
from schema_compiler.schema_management import (
    SchemaError,
    SchemaViolation,
    load_schema_document,
    validate_schema,
)

from .run_contracts import (
    CompileOutcome,
    CompileRequest,
    LoadedSchema,
    ReportOutcome,
    ReportRequest,
)

logger = logging.getLogger(__name__)


class CompilationError(Exception):
    """Raised when a compilation use case cannot be completed."""


def execute_schema_compilation(request: CompileRequest) -> CompileOutcome:
    """Validate the configured schema, then write rules, indexes and the report."""
    loaded = _load_schema(request.config_path)
    configuration = loaded.configuration
    violations = validate_schema(loaded.schema)
    for violation in violations:
        logger.warning("Schema violation: %s", violation)
    if violations and configuration.validation.fail_on_violations:
        raise CompilationError(_format_violations(violations))

    output = configuration.output
    if request.output_dir:
        output = replace(output, directory=Path(request.output_dir).resolve())

    rules = compile_rules(loaded.schema)
    manifest = derive_indexes(loaded.schema)
    logger.info(
        "Compiled %d collection rule blocks and %d composite indexes",
        len(loaded.schema.entities),
        len(manifest.indexes),
    )

    report_path = None
    try:
        artifacts = write_artifacts(rules, manifest, output)
        if request.export_report and configuration.report.path is not None:
            report_path = write_report(
                build_report(loaded.schema),
                configuration.report.format,
                configuration.report.path,
            )
    except ArtifactWriteError as exc:
        raise CompilationError(str(exc)) from exc
    return CompileOutcome(artifacts=artifacts, report_path=report_path, violations=violations)


def execute_schema_validation(config_path: str) -> tuple[SchemaViolation, ...]:
    """Return the violations of the configured schema."""
    return validate_schema(_load_schema(config_path).schema)


def execute_report_rendering(request: ReportRequest) -> ReportOutcome:
    """Render the configured schema report, exporting it when a path is known."""
    loaded = _load_schema(request.config_path)
    settings = loaded.configuration.report
    report_format = request.report_format or settings.format
    output_path = Path(request.output_path) if request.output_path else None
    report = build_report(loaded.schema)

    try:
        resolved = ReportFormat(report_format)
        if output_path is None and resolved is ReportFormat.WORKBOOK:
            output_path = settings.path
            if output_path is None:
                raise CompilationError("Workbook reports require an output path.")
        if output_path is not None:
            return ReportOutcome(
                content=None, output_path=write_report(report, resolved, output_path)
            )
    except (ArtifactWriteError, ReportFormatError) as exc:
        raise CompilationError(str(exc)) from exc
    except ValueError as exc:
        raise CompilationError(f"Unsupported report format: {report_format}") from exc

    if resolved is ReportFormat.STRUCTURED:
        return ReportOutcome(content=serialize_structured_record(report), output_path=None)
    return ReportOutcome(content=render_text(report), output_path=None)


def _load_schema(config_path: str) -> LoadedSchema:
    try:
        configuration = load_configuration(config_path)
        schema = load_schema_document(configuration.schema)
    except (ConfigurationError, SchemaError, OSError) as exc:
        raise CompilationError(str(exc)) from exc
    logger.info(
        "Loaded schema with %d entities and %d roles", len(schema.entities), len(schema.roles)
    )
    return LoadedSchema(configuration=configuration, schema=schema)


def _format_violations(violations: tuple[SchemaViolation, ...]) -> str:
    lines = [f"Schema has {len(violations)} violation(s):"]
    lines.extend(f"  - {violation}" for violation in violations)
    return "\n".join(lines)
