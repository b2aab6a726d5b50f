"""Artifact persistence service."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from schema_compiler.access_rules.rule_compiler import CompiledRules
from schema_compiler.configuration.runtime_settings import OutputSettings
from schema_compiler.index_derivation.index_deriver import serialize_index_manifest
from schema_compiler.index_derivation.index_models import IndexManifest
from schema_compiler.report_rendering.report_encoders import (
    ReportFormatError,
    render_text,
    serialize_structured_record,
)
from schema_compiler.report_rendering.report_models import ReportFormat, SchemaReport
from schema_compiler.report_rendering.report_workbook_writer import write_report_workbook

logger = logging.getLogger(__name__)


class ArtifactWriteError(Exception):
    """Raised when an artifact cannot be written completely."""


@dataclass(frozen=True)
class WrittenArtifacts:
    """Resolved paths of the written artifacts."""

    firestore_rules: Path
    storage_rules: Path
    indexes: Path


def write_artifacts(
    rules: CompiledRules, manifest: IndexManifest, output: OutputSettings
) -> WrittenArtifacts:
    """Write both rule files and the index manifest, each as one full replace."""
    try:
        output.directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ArtifactWriteError(
            f"Cannot create output directory {output.directory}: {exc}"
        ) from exc
    return WrittenArtifacts(
        firestore_rules=replace_file(output.firestore_rules_path, rules.firestore_rules),
        storage_rules=replace_file(output.storage_rules_path, rules.storage_rules),
        indexes=replace_file(output.indexes_path, serialize_index_manifest(manifest)),
    )


def write_report(
    report: SchemaReport, report_format: ReportFormat | str, output_path: Path | str
) -> Path:
    """Export a report to a file in the requested format."""
    try:
        resolved = ReportFormat(report_format)
    except ValueError as exc:
        raise ReportFormatError(f"Unsupported report format: {report_format}") from exc
    destination = Path(output_path)
    if resolved is ReportFormat.WORKBOOK:
        try:
            written = write_report_workbook(report, destination)
        except OSError as exc:
            raise ArtifactWriteError(f"Failed to write {destination}: {exc}") from exc
        logger.info("Wrote report workbook %s", written)
        return written
    if resolved is ReportFormat.STRUCTURED:
        content = serialize_structured_record(report) + "\n"
    else:
        content = render_text(report)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ArtifactWriteError(f"Failed to write {destination}: {exc}") from exc
    return replace_file(destination, content)


def replace_file(path: Path, content: str) -> Path:
    """Replace ``path`` with ``content`` through a sibling temporary file."""
    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(content)
        os.replace(temp_name, path)
    except OSError as exc:
        if temp_name is not None and os.path.exists(temp_name):
            os.unlink(temp_name)
        raise ArtifactWriteError(f"Failed to write {path}: {exc}") from exc
    logger.info("Wrote %s (%d bytes)", path, len(content.encode("utf-8")))
    return path.resolve()
