"""Simple moving average over a fixed-size rolling window."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence

from chartfeed.processing.schemas import Bar, IndicatorPoint


class RollingWindow:
    """Fixed-capacity FIFO of floats with a running sum.

    Pushing into a full window evicts the oldest value, so every update is
    O(1) regardless of capacity.
    """

    def __init__(self, capacity: int) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise ValueError(f"Window capacity must be a positive integer, got {capacity!r}")
        self._capacity = capacity
        self._values: deque[float] = deque()
        self._sum = 0.0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def total(self) -> float:
        return self._sum

    @property
    def is_full(self) -> bool:
        return len(self._values) == self._capacity

    def push(self, value: float) -> float | None:
        """Add a value; return the evicted one, if any."""
        self._values.append(value)
        self._sum += value
        if len(self._values) > self._capacity:
            evicted = self._values.popleft()
            self._sum -= evicted
            return evicted
        return None

    def mean(self) -> float:
        return self._sum / len(self._values)

    def __len__(self) -> int:
        return len(self._values)


def compute_sma(series: Sequence[Bar], period: int) -> list[IndicatorPoint]:
    """SMA of close prices; one point per bar from index ``period - 1`` on.

    The series is assumed to be chronologically sorted already.
    """
    window = RollingWindow(period)
    points: list[IndicatorPoint] = []
    for bar in series:
        window.push(bar.close)
        if window.is_full:
            points.append(IndicatorPoint(time=bar.time, value=window.total / period))
    return points
