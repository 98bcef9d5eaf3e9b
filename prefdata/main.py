"""CLI entry point for inspecting a preference data file."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from prefdata.data_loader import read_data
from prefdata.output import print_data_summary, print_load_errors

app = typer.Typer(help="Load and inspect student-project preference data")


@app.command()
def main(
    data_file: Annotated[
        Path,
        typer.Argument(
            help="Path to preference file (Students:, Projects: and Preferences: sections)"
        ),
    ],
    encoding: Annotated[
        str, typer.Option("-e", "--encoding", help="Text encoding of the file")
    ] = "utf-8",
    stop_on_error: Annotated[
        bool,
        typer.Option(
            "--stop-on-error", help="Stop loading at the first malformed line"
        ),
    ] = False,
    show_matrix: Annotated[
        bool,
        typer.Option("-m", "--show-matrix", help="Print the full preference matrix"),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("-v", "--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """Load a preference file and report what was read."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not data_file.exists():
        typer.echo(f"Error: File not found: {data_file}", err=True)
        raise typer.Exit(1)

    result = read_data(data_file, encoding=encoding, stop_on_error=stop_on_error)

    print_data_summary(result.data, show_matrix=show_matrix)
    print_load_errors(result.errors)

    if not result.ok:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
