"""Artifact writing exports."""

from .artifact_writer import (
    ArtifactWriteError,
    WrittenArtifacts,
    replace_file,
    write_artifacts,
    write_report,
)

__all__ = [
    "ArtifactWriteError",
    "WrittenArtifacts",
    "replace_file",
    "write_artifacts",
    "write_report",
]
