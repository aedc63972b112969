"""Rolling-window indicators computed over an assembled series."""

from chartfeed.indicators.sma import RollingWindow, compute_sma

__all__ = ["RollingWindow", "compute_sma"]
