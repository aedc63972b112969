"""Root CLI application."""

from __future__ import annotations

import typer

from chartfeed.cli.series import series_app
from chartfeed.cli.validate import validate_app

app = typer.Typer(
    name="chartfeed",
    help="Normalize OHLC(V) CSV exports into clean time series and indicators.",
    no_args_is_help=True,
)

app.add_typer(series_app, name="series", help="Build bar series and indicators from a CSV")
app.add_typer(validate_app, name="validate", help="Run ingestion diagnostics")


def main() -> None:
    from chartfeed.config.loader import get_settings
    from chartfeed.utils.logging import setup_logging

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_json)
    app()
