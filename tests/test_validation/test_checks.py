"""Tests for ingestion diagnostics."""

from __future__ import annotations

from pathlib import Path

from chartfeed.ingest.reader import RawTable, read_table
from chartfeed.processing.pipeline import IngestResult, ingest
from chartfeed.processing.schemas import Bar
from chartfeed.validation.checks import (
    check_duplicate_timestamps,
    check_rejected_rows,
    check_series_not_empty,
    check_time_span,
)
from chartfeed.validation.models import CheckStatus
from chartfeed.validation.runner import run_all_checks


def _result(series: list[Bar], row_count: int | None = None) -> IngestResult:
    return IngestResult(
        mapping=None,  # type: ignore[arg-type]
        series=series,
        row_count=len(series) if row_count is None else row_count,
    )


def test_clean_series_passes(sample_series: list[Bar]):
    """A clean series passes every check."""
    report = run_all_checks(_result(sample_series), "clean.csv")
    assert report.overall_status == CheckStatus.PASS
    assert len(report.results) == 4


def test_rejected_rows_warn(sample_csv: Path):
    """Dropped rows produce a warning with per-reason counts."""
    result = ingest(read_table(sample_csv))
    check = check_rejected_rows(result)

    assert check.status == CheckStatus.WARN
    assert "1 of 4" in check.message
    assert check.details["by_reason"] == {"bad_date": 0, "bad_price": 1}
    assert check.details["row_indices"] == [3]


def test_duplicate_timestamps_warn():
    """Repeated times are reported as a warning."""
    bars = [
        Bar(time=t, open=1.0, high=1.0, low=1.0, close=1.0)
        for t in (1704067200, 1704067200, 1704067200, 1704153600)
    ]
    check = check_duplicate_timestamps(_result(bars))

    assert check.status == CheckStatus.WARN
    assert "1 timestamp(s) repeated (2 extra bar(s))" in check.message
    assert check.details["times"] == ["2024-01-01T00:00:00+00:00"]


def test_no_duplicates_pass(sample_series: list[Bar]):
    """Unique times pass the duplicate check."""
    assert check_duplicate_timestamps(_result(sample_series)).status == CheckStatus.PASS


def test_all_rows_rejected_fails():
    """An empty series fails the report."""
    rows = [{"Date": "x", "Open": "1", "High": "1", "Low": "1", "Close": "1"}]
    result = ingest(RawTable.from_records(rows))
    report = run_all_checks(result, "bad.csv")

    assert check_series_not_empty(result).status == CheckStatus.FAIL
    assert check_time_span(result).status == CheckStatus.FAIL
    assert report.overall_status == CheckStatus.FAIL


def test_time_span_details(sample_series: list[Bar]):
    """The time-span check reports first and last bar times."""
    check = check_time_span(_result(sample_series))
    assert check.details["first_time"] == sample_series[0].time
    assert check.details["last_time"] == sample_series[-1].time
    assert check.message.startswith("2024-01-01T00:00:00+00:00 to ")
