"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from chartfeed.config.loader import get_settings
from chartfeed.processing.schemas import Bar
from chartfeed.utils.logging import setup_logging


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging() -> None:
    setup_logging("WARNING")


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached process-wide; tests that set env vars need a clean slate."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_rows() -> list[dict]:
    """Two well-formed rows, day-first dates, as in a typical broker export."""
    return [
        {"Date": "01/01/2024", "Open": "10", "High": "12", "Low": "9", "Close": "11"},
        {"Date": "02/01/2024", "Open": "11", "High": "13", "Low": "10", "Close": "12"},
    ]


@pytest.fixture
def sample_series() -> list[Bar]:
    """Five daily bars, already sorted."""
    day = 86400
    start = 1704067200  # 2024-01-01T00:00:00Z
    closes = [11.0, 12.0, 13.0, 12.5, 14.0]
    return [
        Bar(time=start + i * day, open=c - 1, high=c + 1, low=c - 2, close=c, volume=1000.0 + i)
        for i, c in enumerate(closes)
    ]


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    """An Indian-broker style export: currency glyphs, thousands separators, a bad row."""
    csv_path = tmp_path / "nifty.csv"
    csv_content = """ Date ,Open,High,Low,Close,Volume
03/01/2024,"₹21,650.00","₹21,750.50","₹21,600.00","₹21,700.25","1,200,000"
01/01/2024,"₹21,500.00","₹21,600.00","₹21,450.00","₹21,550.00","1,000,000"
02/01/2024,"₹21,550.00","₹21,700.00","₹21,500.00","₹21,650.00",--
04/01/2024,"₹21,700.00","₹21,800.00","₹21,650.00",n/a,"900,000"
"""
    csv_path.write_text(csv_content, encoding="utf-8")
    return csv_path


@pytest.fixture
def millis_csv(tmp_path: Path) -> Path:
    """Exchange-style export with epoch-millisecond timestamps and short headers."""
    csv_path = tmp_path / "btc.csv"
    csv_content = """timestamp,o,h,l,c,v
1700000060000,37010.5,37020.0,37000.0,37015.0,12.5
1700000000000,37000.0,37012.0,36990.0,37010.5,10.0
1700000120000,37015.0,37030.0,37010.0,37025.0,8.25
"""
    csv_path.write_text(csv_content, encoding="utf-8")
    return csv_path
