"""``revuecheck run``: execute the Revue scenario and report per step."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from revuecheck._internal.config import load_config
from revuecheck._internal.errors import BootstrapError, ConfigError
from revuecheck._internal.logging import setup_logging
from revuecheck.cli.report import print_result, write_json_report
from revuecheck.engine.runner import ScenarioRunner
from revuecheck.metrics.models import StepResult
from revuecheck.revue import REVUE_SCENARIO

console = Console(stderr=True)

# Exit code when the run cannot start (bad config or failed login).
EXIT_SETUP_FAILED = 2


def _print_step(step: StepResult) -> None:
    """Print a one-line progress marker as each step finishes."""
    mark = "[green]PASS[/green]" if step.passed else "[red]FAIL[/red]"
    console.print(f"  {mark} {step.name}")


def run_cmd(
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Revue API base URL (env: REVUECHECK_BASE_URL).",
    ),
    email: str | None = typer.Option(
        None,
        "--email",
        "-e",
        help="Login email (env: REVUECHECK_EMAIL).",
    ),
    password: str | None = typer.Option(
        None,
        "--password",
        help="Login password (env: REVUECHECK_PASSWORD).",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Request timeout in seconds (env: REVUECHECK_TIMEOUT).",
    ),
    json_report: Path | None = typer.Option(
        None,
        "--json-report",
        "-o",
        help="Write the results as JSON to this file.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging.",
    ),
    log_json: bool = typer.Option(
        False,
        "--log-json",
        help="Emit log records as JSON lines.",
    ),
) -> None:
    """Authenticate, run the seven Revue checks in order and report."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING, json_format=log_json)

    overrides = {
        key: value
        for key, value in {
            "base_url": base_url.rstrip("/") if base_url else None,
            "email": email,
            "password": password,
            "request_timeout": timeout,
        }.items()
        if value is not None
    }

    try:
        config = load_config(**overrides)
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=EXIT_SETUP_FAILED) from exc

    console.print(
        Panel(
            f"[bold]Scenario:[/bold] {REVUE_SCENARIO.name}\n"
            f"[bold]API:[/bold]      {config.base_url}\n"
            f"[bold]User:[/bold]     {config.email}\n"
            f"[bold]Steps:[/bold]    {len(REVUE_SCENARIO)}",
            title="revuecheck",
            border_style="cyan",
        )
    )

    runner = ScenarioRunner(config, REVUE_SCENARIO, on_step=_print_step)
    try:
        result = runner.run()
    except BootstrapError as exc:
        console.print(f"[red]Bootstrap failed:[/red] {escape(str(exc))}")
        raise typer.Exit(code=EXIT_SETUP_FAILED) from exc

    console.print()
    print_result(result)

    if json_report is not None:
        written = write_json_report(result, json_report)
        console.print(f"Report written to {written}")

    if not result.passed:
        raise typer.Exit(code=1)
