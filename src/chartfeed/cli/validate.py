"""CLI commands for ingestion diagnostics."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table
from typing_extensions import Annotated

from chartfeed.cli.common import console, run_ingest
from chartfeed.validation.models import CheckReport, CheckStatus

validate_app = typer.Typer(no_args_is_help=True)

STATUS_STYLES = {
    CheckStatus.PASS: "green",
    CheckStatus.WARN: "yellow",
    CheckStatus.FAIL: "red",
}


@validate_app.command("run")
def validate_run(
    file: Annotated[Path, typer.Argument(help="CSV file", exists=True, dir_okay=False)],
    map_options: Annotated[
        Optional[list[str]], typer.Option("--map", "-m", help="Override a role")
    ] = None,
    assume_millis: Annotated[
        Optional[bool], typer.Option("--assume-millis/--no-assume-millis")
    ] = None,
) -> None:
    """Ingest a CSV and report dropped rows, repeated timestamps and coverage."""
    from chartfeed.validation.runner import run_all_checks

    result = run_ingest(file, map_options, assume_millis)
    report = run_all_checks(result, file.name)
    _print_report(report)

    if report.overall_status == CheckStatus.FAIL:
        raise typer.Exit(1)


def _format_details(details: dict | None) -> str:
    if not details:
        return ""
    return "; ".join(f"{key}={value}" for key, value in details.items())


def _print_report(report: CheckReport) -> None:
    overall = report.overall_status
    counts = report.status_counts()
    console.print(
        f"\n[bold]{report.source}[/bold]: [{STATUS_STYLES[overall]}]{overall.value.upper()}[/] "
        f"({counts[CheckStatus.PASS]} passed, {counts[CheckStatus.WARN]} warned, "
        f"{counts[CheckStatus.FAIL]} failed)"
    )

    table = Table(show_header=True, header_style="bold", padding=(0, 1))
    table.add_column("Check", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Message")
    table.add_column("Details", overflow="fold")

    for result in report.results:
        style = STATUS_STYLES[result.status]
        table.add_row(
            result.check_name,
            f"[{style}]{result.status.value}[/]",
            result.message,
            escape(_format_details(result.details)),
        )

    console.print(table)
