"""Validate command for checking fitting database files.

This module provides the `validate` command that checks a JSON fitting
database for syntax errors, schema errors and unresolved references.
"""

from pathlib import Path
from typing import Annotated

import typer

from furnisher.application.config import ConfigError, load_catalog


def validate_command(
    catalog_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON fitting database to validate"),
    ],
) -> None:
    """Validate a fitting database file.

    Checks the file for:
    - JSON syntax errors
    - Schema validation errors (missing fields, non-positive dimensions, etc.)
    - References to unknown face types or fitting types

    Exit codes:
        0 - Fitting database is valid
        1 - Fitting database has errors (cannot be used)

    Example:
        furnisher validate fittings.json
    """
    typer.echo(f"Validating {catalog_file}...")
    typer.echo()

    try:
        catalog = load_catalog(catalog_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        f"Fitting database is valid: {len(catalog.face_types)} face types, "
        f"{len(catalog.fitting_types)} fitting types, "
        f"{len(catalog.fitting_models)} fitting models."
    )


def display_load_error(error: ConfigError) -> None:
    """Display a configuration loading error.

    Args:
        error: The ConfigError to display
    """
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path") or "<root>"
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)
