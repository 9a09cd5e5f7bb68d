"""Rendering and persistence of scenario results.

``revuecheck report`` re-renders a JSON report written by
``revuecheck run --json-report``.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from revuecheck.metrics.models import SuiteResult

console = Console(stderr=True)


def build_result_table(result: SuiteResult) -> Table:
    """Build a Rich table with one row per step.

    Args:
        result: Completed suite result.

    Returns:
        Formatted Rich Table.
    """
    table = Table(
        title=f"{result.scenario_name} @ {result.base_url}",
        show_header=True,
        header_style="bold cyan",
        expand=True,
    )
    table.add_column("#", justify="right")
    table.add_column("Step", style="bold")
    table.add_column("Result")
    table.add_column("Requests", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Details")

    for index, step in enumerate(result.steps, start=1):
        statuses = ", ".join(str(r.status_code) for r in step.requests) or "-"
        table.add_row(
            str(index),
            step.name,
            "[green]PASS[/green]" if step.passed else "[red]FAIL[/red]",
            statuses,
            f"{step.duration_ms:.0f}ms",
            escape(step.message or ""),
        )

    return table


def print_result(result: SuiteResult) -> None:
    """Print the step table and a one-line verdict.

    Args:
        result: Completed suite result.
    """
    console.print(build_result_table(result))

    passed = len(result.steps) - len(result.failed_steps)
    summary = (
        f"{passed}/{len(result.steps)} steps passed, "
        f"{result.total_requests} requests in {result.duration_seconds:.2f}s"
    )
    if result.passed:
        console.print(f"[green]All checks passed:[/green] {summary}")
    else:
        failed = ", ".join(step.name for step in result.failed_steps)
        console.print(f"[red]Checks failed:[/red] {summary} (failed: {failed})")


def write_json_report(result: SuiteResult, path: Path) -> Path:
    """Write a suite result as JSON.

    Args:
        result: Completed suite result.
        path: Destination file. Parent directories are created.

    Returns:
        The written path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(result.to_dict(), indent=2))
    return path


def load_json_report(path: Path) -> SuiteResult:
    """Read a JSON report written by ``write_json_report``.

    Raises:
        ValueError: If the file is not a valid report.
    """
    data = json.loads(path.read_text())
    try:
        return SuiteResult.from_dict(data)
    except (KeyError, TypeError) as exc:
        msg = f"{path} is not a revuecheck report: {exc}"
        raise ValueError(msg) from exc


def report_cmd(
    report_file: Path = typer.Argument(
        ...,
        help="JSON report written by 'revuecheck run --json-report'.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Render a saved report and exit with its outcome."""
    try:
        result = load_json_report(report_file)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    print_result(result)
    if not result.passed:
        raise typer.Exit(code=1)
