"""Run execution domain exports."""

from .compilation_run_use_case import (
    CompilationError,
    execute_report_rendering,
    execute_schema_compilation,
    execute_schema_validation,
)
from .run_contracts import (
    CompileOutcome,
    CompileRequest,
    LoadedSchema,
    ReportOutcome,
    ReportRequest,
)

__all__ = [
    "CompileRequest",
    "CompileOutcome",
    "LoadedSchema",
    "ReportRequest",
    "ReportOutcome",
    "CompilationError",
    "execute_report_rendering",
    "execute_schema_compilation",
    "execute_schema_validation",
]
