"""Render validation results for the terminal."""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.table import Table
from ruamel.yaml import YAML

from xmlvalidator.models import ValidationError, ValidationResult

FILE_WIDTH = 28
LINE_WIDTH = 6


def errors_table(errors: list[ValidationError]) -> Table:
    """Build a File / Line / Message table, one row per error."""
    table = Table(show_header=True, show_lines=False)
    table.add_column("File", style="bold cyan", width=FILE_WIDTH, overflow="fold")
    table.add_column("Line", justify="right", width=LINE_WIDTH)
    table.add_column("Message", style="red", overflow="fold")
    for err in errors:
        table.add_row(err.file, str(err.line), err.message)
    return table


def result_to_json(result: ValidationResult) -> str:
    return result.model_dump_json(indent=2)


def result_to_yaml(result: ValidationResult) -> str:
    payload = result.model_dump(mode="json")
    yaml = YAML()
    yaml.default_flow_style = False
    buf = StringIO()
    yaml.dump(payload, buf)
    return buf.getvalue()


def print_table_report(console: Console, result: ValidationResult) -> None:
    if result.valid:
        console.print("[green]XML is valid.[/green]")
        return
    if result.unparsed:
        console.print(
            f"[red]XML validation failed (exit status {result.exit_code}) "
            "but no errors could be extracted.[/red]"
        )
        if result.raw_output.strip():
            console.print(result.raw_output.strip(), markup=False, highlight=False)
        return
    console.print("[red]XML validation errors:[/red]")
    console.print(errors_table(result.errors))
