"""Read-only lookups into an assembled series (crosshair legend)."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence
from dataclasses import dataclass

from chartfeed.processing.schemas import Bar, IndicatorPoint


@dataclass(frozen=True)
class LegendSnapshot:
    """Values shown for the bar under the cursor."""

    time: int
    open: float
    high: float
    low: float
    close: float
    volume: float | None
    sma: float | None


def _index_of(times: Sequence[int], time: int) -> int | None:
    i = bisect_left(times, time)
    if i < len(times) and times[i] == time:
        return i
    return None


def bar_at(series: Sequence[Bar], time: int) -> Bar | None:
    """First bar stamped exactly at ``time``, or None."""
    i = _index_of([b.time for b in series], time)
    return series[i] if i is not None else None


def legend_at(
    series: Sequence[Bar],
    points: Sequence[IndicatorPoint],
    time: int,
) -> LegendSnapshot | None:
    """Bar and SMA value at ``time``; None if no bar sits there.

    ``points`` must be the indicator computed over this same ``series``: the
    point for bar ``i`` sits at ``i - (len(series) - len(points))``, so bars
    sharing a timestamp each get their own value.
    """
    i = _index_of([b.time for b in series], time)
    if i is None:
        return None

    bar = series[i]
    j = i - (len(series) - len(points))
    return LegendSnapshot(
        time=bar.time,
        open=bar.open,
        high=bar.high,
        low=bar.low,
        close=bar.close,
        volume=bar.volume,
        sma=points[j].value if 0 <= j < len(points) else None,
    )
