"""Orders normalized bars into a chronological series."""

from __future__ import annotations

from collections.abc import Iterable
from operator import attrgetter

from chartfeed.processing.schemas import Bar, Series
from chartfeed.utils.logging import get_logger

logger = get_logger(__name__)


def assemble(bars: Iterable[Bar]) -> Series:
    """Return a new list of bars sorted ascending by time.

    The sort is stable: bars sharing a timestamp are neither merged nor
    rejected, and keep the order in which they arrived.
    """
    series = sorted(bars, key=attrgetter("time"))
    if series:
        logger.debug(
            "series_assembled",
            bars=len(series),
            first_time=series[0].time,
            last_time=series[-1].time,
        )
    return series
