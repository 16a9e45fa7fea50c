"""Typer CLI for fitting placement."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from furnisher.application import GeneratePlacementsCommand, PlacementOutput
from furnisher.application.config import (
    ConfigError,
    PlacementRequestConfig,
    load_catalog,
    load_default_catalog,
    load_demo_request,
    load_request,
    resolve_catalog_path,
)
from furnisher.cli.commands import display_load_error, validate_command
from furnisher.domain import FittingCatalog
from furnisher.infrastructure import (
    GridFormatter,
    JsonExporter,
    PlacementListFormatter,
    WarningFormatter,
)

OUTPUT_FORMATS = ("text", "json")

EXIT_INPUT_ERROR = 1
EXIT_NO_LAYOUT = 2

app = typer.Typer(
    name="furnisher",
    help="Place furniture in rectangular rooms, honoring spatial relations and clearances.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log relation picks and search progress"),
    ] = False,
) -> None:
    """Place furniture in rectangular rooms."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def _check_format(output_format: str) -> None:
    if output_format not in OUTPUT_FORMATS:
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo(f"Available formats: {', '.join(OUTPUT_FORMATS)}", err=True)
        raise typer.Exit(code=EXIT_INPUT_ERROR)


def _run(
    request: PlacementRequestConfig,
    catalog: FittingCatalog,
    seed: int | None,
    output_format: str,
    show_grid: bool,
) -> None:
    command = GeneratePlacementsCommand(catalog)
    result = command.execute_config(request, seed=seed)
    _display_result(result, output_format, show_grid)


def _display_result(result: PlacementOutput, output_format: str, show_grid: bool) -> None:
    if not result.is_valid:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=EXIT_INPUT_ERROR)

    if output_format == "json":
        typer.echo(JsonExporter().export(result))
    else:
        typer.echo(PlacementListFormatter().format(result.placements))
        warnings = WarningFormatter().format(result.warnings)
        if warnings:
            typer.echo(warnings, err=True)
        if not result.found:
            typer.echo("No possible fitting layout could be found.", err=True)

    if show_grid and result.room is not None:
        typer.echo()
        typer.echo(GridFormatter().format(result.room))

    if not result.found:
        raise typer.Exit(code=EXIT_NO_LAYOUT)


@app.command()
def generate(
    request_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON placement request"),
    ],
    catalog_file: Annotated[
        Path | None,
        typer.Option(
            "--catalog",
            "-c",
            help="Path to a JSON fitting database (overrides the request's catalog)",
        ),
    ] = None,
    seed: Annotated[
        int | None,
        typer.Option("--seed", "-s", min=0, help="Random seed, 0 for time-based randomness"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    show_grid: Annotated[
        bool,
        typer.Option("--show-grid", help="Print the occupancy grid of the final layout"),
    ] = False,
) -> None:
    """Generate fitting placements for a placement request.

    Exit codes:
        0 - A layout was found
        1 - The request or fitting database has errors
        2 - No feasible layout exists for the request

    Example:
        furnisher generate living-room.json --seed 42
    """
    _check_format(output_format)

    try:
        request = load_request(request_file)
        catalog_path = catalog_file or resolve_catalog_path(request, request_file)
        catalog = load_catalog(catalog_path) if catalog_path else load_default_catalog()
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=EXIT_INPUT_ERROR)

    _run(request, catalog, seed, output_format, show_grid)


@app.command()
def demo(
    seed: Annotated[
        int | None,
        typer.Option("--seed", "-s", min=0, help="Random seed, 0 for time-based randomness"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    show_grid: Annotated[
        bool,
        typer.Option("--show-grid", help="Print the occupancy grid of the final layout"),
    ] = False,
) -> None:
    """Furnish the bundled reference living room.

    The room is 5 x 4 m with one door and four windows; eight fittings from
    the bundled fitting database are placed in it.
    """
    _check_format(output_format)
    _run(load_demo_request(), load_default_catalog(), seed, output_format, show_grid)


if __name__ == "__main__":
    app()
