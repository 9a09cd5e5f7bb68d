"""Main Typer application, entry point for the ``revuecheck`` CLI."""

from __future__ import annotations

import typer

from revuecheck import __version__
from revuecheck.cli.report import report_cmd
from revuecheck.cli.run import run_cmd

app = typer.Typer(
    name="revuecheck",
    help="End-to-end checks for the Revue API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("run", help="Run the Revue CRUD scenario against the API.")(run_cmd)
app.command("report", help="Render a saved JSON report.")(report_cmd)


def _version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: True if --version was passed.
    """
    if value:
        typer.echo(f"revuecheck {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """revuecheck: end-to-end checks for the Revue API."""
