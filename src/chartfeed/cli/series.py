"""CLI commands for turning a CSV into a bar series and indicators."""

from __future__ import annotations

import datetime
from pathlib import Path
from typing import Optional

import polars as pl
import typer
from typing_extensions import Annotated

from chartfeed.cli.common import (
    console,
    print_dataframe,
    print_mapping,
    run_ingest,
    write_csv,
)

series_app = typer.Typer(no_args_is_help=True)

FileArg = Annotated[
    Path, typer.Argument(help="CSV file with a header row", exists=True, dir_okay=False)
]
MapOpt = Annotated[
    Optional[list[str]],
    typer.Option("--map", "-m", help="Override a role, e.g. --map close='Adj Close'"),
]
MillisOpt = Annotated[
    Optional[bool],
    typer.Option(
        "--assume-millis/--no-assume-millis",
        help="Treat numeric dates as epoch milliseconds (default from settings)",
    ),
]


@series_app.command("inspect")
def series_inspect(file: FileArg) -> None:
    """Show headers, the auto-detected mapping and the first raw rows."""
    from chartfeed.config.loader import get_settings
    from chartfeed.errors import ChartfeedError
    from chartfeed.ingest.reader import read_table
    from chartfeed.processing.pipeline import IngestSession

    settings = get_settings()
    session = IngestSession(assume_millis=settings.ingest.assume_millis)

    try:
        session.load(read_table(file, settings.ingest.delimiter, settings.ingest.encoding))
    except ChartfeedError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"{len(session.table)} row(s), columns: {', '.join(session.table.headers)}")
    print_mapping(session.mapping)

    preview = session.preview(settings.ingest.preview_rows)
    if preview:
        print_dataframe(pl.DataFrame(preview), title="Preview")

    if not session.mapping.is_complete:
        missing = ", ".join(session.mapping.missing_roles())
        console.print(f"[yellow]Unmapped role(s): {missing}[/yellow]")
    elif session.last_result is not None:
        result = session.last_result
        typer.echo(f"{len(result.series)} valid bar(s), {result.dropped} row(s) dropped")


@series_app.command("load")
def series_load(
    file: FileArg,
    map_options: MapOpt = None,
    assume_millis: MillisOpt = None,
    rows: Annotated[int, typer.Option("--rows", "-n", help="Trailing bars to display")] = 10,
    csv_out: Annotated[
        Optional[str], typer.Option("--csv", help="Export the full series to a CSV file")
    ] = None,
) -> None:
    """Normalize a CSV into a chronologically sorted OHLC(V) series."""
    from chartfeed.processing.schemas import series_to_frame, with_datetime

    result = run_ingest(file, map_options, assume_millis)
    typer.echo(
        f"Parsed {len(result.series)} bar(s) from {result.row_count} row(s), "
        f"{result.dropped} dropped"
    )

    df = with_datetime(series_to_frame(result.series))
    if csv_out:
        write_csv(df, csv_out)
    elif not df.is_empty():
        print_dataframe(df.tail(rows), title="Series")


@series_app.command("sma")
def series_sma(
    file: FileArg,
    period: Annotated[
        Optional[int], typer.Option("--period", "-p", min=1, help="SMA window length")
    ] = None,
    map_options: MapOpt = None,
    assume_millis: MillisOpt = None,
    rows: Annotated[int, typer.Option("--rows", "-n", help="Trailing points to display")] = 10,
    csv_out: Annotated[
        Optional[str], typer.Option("--csv", help="Export the indicator to a CSV file")
    ] = None,
) -> None:
    """Compute the simple moving average of close prices."""
    from chartfeed.config.loader import get_settings
    from chartfeed.indicators.sma import compute_sma
    from chartfeed.processing.schemas import indicator_to_frame, with_datetime

    if period is None:
        period = get_settings().indicator.sma_period

    result = run_ingest(file, map_options, assume_millis)
    points = compute_sma(result.series, period)
    typer.echo(f"SMA({period}): {len(points)} point(s) over {len(result.series)} bar(s)")

    df = with_datetime(indicator_to_frame(points, name=f"sma_{period}"))
    if csv_out:
        write_csv(df, csv_out)
    elif not df.is_empty():
        print_dataframe(df.tail(rows), title=f"SMA({period})")


@series_app.command("legend")
def series_legend(
    file: FileArg,
    at: Annotated[str, typer.Option("--time", "-t", help="Epoch seconds or a date")],
    period: Annotated[
        Optional[int], typer.Option("--period", "-p", min=1, help="SMA window length")
    ] = None,
    map_options: MapOpt = None,
    assume_millis: MillisOpt = None,
) -> None:
    """Show the bar and SMA value at a given time."""
    from chartfeed.config.loader import get_settings
    from chartfeed.indicators.sma import compute_sma
    from chartfeed.processing.fields import is_nan, try_parse_date_to_sec
    from chartfeed.processing.lookup import legend_at

    if period is None:
        period = get_settings().indicator.sma_period

    time = try_parse_date_to_sec(at)
    if is_nan(time):
        typer.echo(f"Error: could not parse time '{at}'", err=True)
        raise typer.Exit(1)

    result = run_ingest(file, map_options, assume_millis)
    snapshot = legend_at(result.series, compute_sma(result.series, period), time)
    if snapshot is None:
        typer.echo(f"No bar at {time}")
        raise typer.Exit(1)

    sma = "-" if snapshot.sma is None else f"{snapshot.sma:.2f}"
    stamp = datetime.datetime.fromtimestamp(snapshot.time, tz=datetime.timezone.utc)
    typer.echo(
        f"{stamp.isoformat()}  O {snapshot.open:.2f}  H {snapshot.high:.2f}  L {snapshot.low:.2f}  "
        f"C {snapshot.close:.2f}  SMA({period}) {sma}"
    )
