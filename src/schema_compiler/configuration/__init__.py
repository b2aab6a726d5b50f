"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import REPORT_FORMATS, ConfigurationError, load_configuration
from .runtime_settings import (
    Configuration,
    OutputSettings,
    ReportSettings,
    SchemaConfig,
    ValidationSettings,
)

__all__ = [
    "Configuration",
    "OutputSettings",
    "ReportSettings",
    "SchemaConfig",
    "ValidationSettings",
    "ConfigurationError",
    "REPORT_FORMATS",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
