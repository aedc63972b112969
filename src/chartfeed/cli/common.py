"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path

import polars as pl
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from chartfeed.errors import ChartfeedError, MappingIncompleteError
from chartfeed.processing.columns import ROLE_CANDIDATES, ColumnMapping

console = Console()


def parse_map_options(options: list[str] | None) -> dict[str, str]:
    """Turn ``["close=Adj Close", "date=Day"]`` into a role -> column dict."""
    overrides: dict[str, str] = {}
    for option in options or []:
        role, sep, column = option.partition("=")
        role = role.strip().lower()
        if not sep or role not in ROLE_CANDIDATES:
            typer.echo(
                f"Error: invalid --map '{option}', expected ROLE=COLUMN with ROLE in "
                f"{', '.join(ROLE_CANDIDATES)}",
                err=True,
            )
            raise typer.Exit(1)
        overrides[role] = column.strip()
    return overrides


def run_ingest(path: Path, map_options: list[str] | None, assume_millis: bool | None):
    """Read and ingest a CSV, turning input-level failures into exit code 1."""
    from chartfeed.config.loader import get_settings
    from chartfeed.ingest.reader import read_table
    from chartfeed.processing.columns import auto_detect
    from chartfeed.processing.pipeline import ingest

    settings = get_settings()
    if assume_millis is None:
        assume_millis = settings.ingest.assume_millis

    try:
        table = read_table(path, settings.ingest.delimiter, settings.ingest.encoding)
        mapping = auto_detect(table.headers).merged(**parse_map_options(map_options))
        return ingest(table, mapping, assume_millis)
    except MappingIncompleteError as e:
        typer.echo(f"Error: {e}. Use --map ROLE=COLUMN to assign them.", err=True)
        raise typer.Exit(1)
    except ChartfeedError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def print_mapping(mapping: ColumnMapping) -> None:
    table = Table(title="Column Mapping", show_header=True, header_style="bold")
    table.add_column("Role")
    table.add_column("Column")

    for role, column in mapping.model_dump().items():
        table.add_row(role, escape(column) if column else "[red]-[/red]")

    console.print(table)


def print_dataframe(df: pl.DataFrame, title: str | None = None) -> None:
    """Print a Polars DataFrame as a Rich table."""
    table = Table(title=title, show_header=True, header_style="bold")

    for col in df.columns:
        table.add_column(escape(col))

    for row in df.iter_rows():
        table.add_row(*["" if v is None else escape(str(v)) for v in row])

    console.print(table)


def write_csv(df: pl.DataFrame, output: str) -> None:
    df.write_csv(output)
    typer.echo(f"Exported {len(df)} rows to {output}")
