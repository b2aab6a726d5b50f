"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from schema_compiler.configuration import (
    DEFAULT_CONFIG_FILENAME,
    REPORT_FORMATS,
    write_placeholder_configuration,
)
from schema_compiler.run_execution import (
    CompilationError,
    CompileRequest,
    ReportRequest,
    execute_report_rendering,
    execute_schema_compilation,
    execute_schema_validation,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-compiler")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log progress to stderr.")
def cli(verbose: bool) -> None:
    """Compile a data model schema into access rules, indexes and reports."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML compiler configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML compiler configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="validate")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON compiler configuration file",
)
def validate(config_path: str) -> None:
    """Check the configured schema and list every violation."""
    try:
        violations = execute_schema_validation(config_path)
    except CompilationError as exc:
        raise CliError(str(exc)) from exc
    if violations:
        raise CliError("\n".join(str(violation) for violation in violations))
    click.echo("schema is valid")


@cli.command(name="compile")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON compiler configuration file",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Optional directory overriding output.directory",
)
def compile_schema(config_path: str, output_dir: str | None) -> None:
    """Write access rules and the composite index manifest for the schema."""
    try:
        outcome = execute_schema_compilation(
            CompileRequest(config_path=config_path, output_dir=output_dir)
        )
    except CompilationError as exc:
        raise CliError(str(exc)) from exc
    for violation in outcome.violations:
        click.echo(f"warning: {violation}", err=True)
    click.echo(str(outcome.artifacts.firestore_rules))
    click.echo(str(outcome.artifacts.storage_rules))
    click.echo(str(outcome.artifacts.indexes))
    if outcome.report_path is not None:
        click.echo(str(outcome.report_path))


@cli.command(name="report")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON compiler configuration file",
)
@click.option(
    "--format",
    "report_format",
    required=False,
    type=click.Choice(REPORT_FORMATS),
    help="Report format; defaults to report.format",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Write the report to this file instead of stdout",
)
def report(config_path: str, report_format: str | None, output_path: str | None) -> None:
    """Preview the schema structure, security policies and capacity estimates."""
    try:
        outcome = execute_report_rendering(
            ReportRequest(
                config_path=config_path,
                report_format=report_format,
                output_path=output_path,
            )
        )
    except CompilationError as exc:
        raise CliError(str(exc)) from exc
    if outcome.output_path is not None:
        click.echo(str(outcome.output_path))
    elif outcome.content is not None:
        click.echo(outcome.content, nl=not outcome.content.endswith("\n"))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
