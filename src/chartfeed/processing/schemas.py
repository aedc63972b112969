"""Canonical bar and indicator records, plus their Polars schemas."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Union

import polars as pl

from chartfeed.errors import InvalidBarError

# A raw cell as handed over by the table reader.
Cell = Union[str, int, float, None]
RawRow = Mapping[str, Cell]

PRICE_FIELDS = ("open", "high", "low", "close")

# 9999-12-31T23:59:59Z, the last second a datetime can represent.
MAX_EPOCH_SECONDS = 253402300799


@dataclass(frozen=True)
class Bar:
    """One normalized OHLC(V) interval.

    ``time`` is epoch seconds (UTC). Construction fails with InvalidBarError
    when the time is negative or past year 9999, or any price is NaN/Infinity.
    """

    time: int
    open: float
    high: float
    low: float
    close: float
    volume: float | None = None

    def __post_init__(self) -> None:
        valid_type = isinstance(self.time, int) and not isinstance(self.time, bool)
        if not valid_type or not 0 <= self.time <= MAX_EPOCH_SECONDS:
            raise InvalidBarError(
                f"Bar time must be an integer in [0, {MAX_EPOCH_SECONDS}], got {self.time!r}"
            )
        for name in PRICE_FIELDS:
            if not math.isfinite(getattr(self, name)):
                raise InvalidBarError(f"Bar {name} must be finite, got {getattr(self, name)!r}")


# Alias for readability at call sites; a Series is a time-sorted list of bars.
Series = list[Bar]


@dataclass(frozen=True)
class IndicatorPoint:
    """A single indicator value aligned with a bar's time."""

    time: int
    value: float


SERIES_SCHEMA = {
    "time": pl.Int64,
    "open": pl.Float64,
    "high": pl.Float64,
    "low": pl.Float64,
    "close": pl.Float64,
    "volume": pl.Float64,
}

INDICATOR_SCHEMA = {
    "time": pl.Int64,
    "value": pl.Float64,
}

SERIES_COLUMNS = list(SERIES_SCHEMA.keys())


def series_to_frame(series: Sequence[Bar]) -> pl.DataFrame:
    """Convert bars to a DataFrame with the canonical schema (missing volume is null)."""
    return pl.DataFrame(
        {
            "time": [b.time for b in series],
            "open": [b.open for b in series],
            "high": [b.high for b in series],
            "low": [b.low for b in series],
            "close": [b.close for b in series],
            "volume": [b.volume for b in series],
        },
        schema=SERIES_SCHEMA,
    )


def indicator_to_frame(points: Sequence[IndicatorPoint], name: str = "value") -> pl.DataFrame:
    """Convert indicator points to a two-column DataFrame."""
    df = pl.DataFrame(
        {"time": [p.time for p in points], "value": [p.value for p in points]},
        schema=INDICATOR_SCHEMA,
    )
    if name != "value":
        df = df.rename({"value": name})
    return df


def with_datetime(df: pl.DataFrame) -> pl.DataFrame:
    """Add a human-readable UTC ``datetime`` column derived from epoch-second ``time``."""
    return df.with_columns(
        pl.from_epoch(pl.col("time"), time_unit="s").dt.replace_time_zone("UTC").alias("datetime")
    )
