"""Command-line interface: ``xml-validator <schema> <document>``."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console

from xmlvalidator.config import load_options
from xmlvalidator.engine.xmllint import XmllintEngine
from xmlvalidator.errors import XMLValidatorError
from xmlvalidator.report import print_table_report, result_to_json, result_to_yaml
from xmlvalidator.validator import XMLValidator

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)
console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    table = "table"
    json = "json"
    yaml = "yaml"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@app.command()
def main(
    schema: Path = typer.Argument(..., help="Path to the XSD schema"),
    document: Path = typer.Argument(..., help="Path to the XML document"),
    output_format: OutputFormat = typer.Option(
        OutputFormat.table, "--format", "-f", help="Output format"
    ),
    xmllint: str | None = typer.Option(
        None, "--xmllint", help="xmllint executable (overrides XMLVALIDATOR_XMLLINT)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Validate an XML document against an XSD schema."""
    try:
        options = load_options()
    except XMLValidatorError as e:
        err_console.print(f"An error occurred: {e}", markup=False, highlight=False)
        raise typer.Exit(code=2)

    _setup_logging(verbose or options.dev_mode)

    if output_format == OutputFormat.table:
        console.print(f"Validating XML: {document}", markup=False, highlight=False)
        console.print(f"Using XSD: {schema}", markup=False, highlight=False)

    tmp_dir = options.tmp_dir
    try:
        validator = XMLValidator(
            schema,
            document,
            engine=XmllintEngine(xmllint or options.xmllint_path),
            tempdir_provider=(lambda: tmp_dir) if tmp_dir else None,
        )
        result = validator.validate_sync()
    except XMLValidatorError as e:
        logger.debug("Validation could not run", exc_info=True)
        err_console.print(f"An error occurred: {e}", markup=False, highlight=False)
        raise typer.Exit(code=2)

    if output_format == OutputFormat.json:
        typer.echo(result_to_json(result))
    elif output_format == OutputFormat.yaml:
        typer.echo(result_to_yaml(result), nl=False)
    else:
        print_table_report(console, result)

    if not result.valid:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
