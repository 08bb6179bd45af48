"""
Validate Subcommand Module

Validates a pipeline document against the registered step schemas and
prints every defect found. Supports JSON and YAML documents and JSON
report generation.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from mediaflow.config import ConfigurationManager
from mediaflow.errors import ConfigurationError, DocumentError
from mediaflow.parser import PipelineParser
from mediaflow.utils.files import MediaPredicates
from mediaflow.utils.logging_config import configure_logging, logging_config
from mediaflow.validation.report import DiagnosticReport

from .help_texts import (
    FILE_NOT_FOUND_ERROR,
    PERMISSION_ERROR,
    VALIDATE_FORMAT_HELP,
    VALIDATE_HELP,
    VALIDATE_INPUT_HELP,
    VALIDATE_JSON_HELP,
    VALIDATE_REPORT_HELP,
    ExitCodes,
)
from .shared_options import config_option, format_option, input_option, log_level_option


logger = logging.getLogger(__name__)

_EXTENSION_FORMATS = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


@click.command(help=VALIDATE_HELP)
@input_option(help=VALIDATE_INPUT_HELP)
@format_option(help=VALIDATE_FORMAT_HELP)
@click.option(
    "--report", "-r",
    "report_path",
    type=click.Path(),
    help=VALIDATE_REPORT_HELP,
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help=VALIDATE_JSON_HELP,
)
@config_option()
@log_level_option()
def validate(
    input_path: str,
    document_format: Optional[str],
    report_path: Optional[str],
    as_json: bool,
    config: Optional[str],
    log_level: Optional[str],
):
    """Validate a pipeline document.

    Examples:
        # Validate a JSON pipeline
        mediaflow validate --input pipeline.json

        # Validate a YAML pipeline and save the JSON report
        mediaflow validate --input pipeline.yaml --report report.json

        # Print the report as JSON
        mediaflow validate --input pipeline.json --json
    """
    try:
        settings = ConfigurationManager().load_configuration(
            config_file=config,
            cli_overrides={"log_level": log_level.lower() if log_level else None},
        )
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCodes.INVALID_CONFIGURATION)

    configure_logging(level=settings.log_level, log_file=settings.log_file, force=True)
    logging_config.log_configuration_details({
        "input": input_path,
        "log_level": settings.log_level,
        "document_format": settings.document_format,
        "report_format": settings.report_format,
    })

    fmt = (document_format or "").lower() or _format_from_extension(input_path) or settings.document_format

    try:
        raw_text = Path(input_path).read_text(encoding="utf-8")
    except FileNotFoundError:
        click.echo(f"❌ {FILE_NOT_FOUND_ERROR.format(path=input_path)}", err=True)
        sys.exit(ExitCodes.FILE_NOT_FOUND)
    except PermissionError:
        click.echo(f"❌ {PERMISSION_ERROR.format(path=input_path)}", err=True)
        sys.exit(ExitCodes.PERMISSION_ERROR)

    parser = PipelineParser(predicates=MediaPredicates.from_config(settings.media))
    try:
        report = parser.parse(raw_text, fmt).report(input_path)
    except DocumentError as e:
        logger.error(f"Could not read {input_path}: {e}")
        report = DiagnosticReport(source=input_path, error=_describe_document_error(e))

    if as_json or settings.report_format == "json":
        click.echo(report.to_json())
    else:
        click.echo(report.format_human())

    if report_path:
        _write_report(report_path, report.to_dict())
        click.echo(f"\nReport saved: {report_path}")

    if not report.is_valid:
        sys.exit(ExitCodes.VALIDATION_FAILED)


def _format_from_extension(path: str) -> Optional[str]:
    return _EXTENSION_FORMATS.get(Path(path).suffix.lower())


def _describe_document_error(error: DocumentError) -> str:
    if error.line_number is None:
        return str(error)
    if error.column is None:
        return f"{error} (line {error.line_number})"
    return f"{error} (line {error.line_number}, column {error.column})"


def _write_report(path: str, data: dict):
    """Write a JSON report to disk."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
