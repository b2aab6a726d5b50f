"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-compiler.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Compiler configuration template for schema-compiler.
# Replace every <REQUIRED> placeholder before running validate, compile or report.
# Uncomment <OPTIONAL> entries only when the defaults do not fit.

schema:
  # Provide either a schema file path or inline schema YAML/JSON text.
  path: "<REQUIRED>"
  # inline: "<OPTIONAL>"

output:
  # Relative paths resolve against this file's directory.
  # directory: "<OPTIONAL>"
  firestore_rules: "firestore.rules"
  storage_rules: "storage.rules"
  indexes: "firestore.indexes.json"

report:
  # One of: structured, text, xlsx.
  format: "text"
  # path: "<OPTIONAL>"

validation:
  # Refuse to write artifacts while the schema has violations.
  fail_on_violations: true
"""


def build_placeholder_configuration() -> str:
    """Build a YAML compiler configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
