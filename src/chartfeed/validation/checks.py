"""Diagnostic checks over an ingestion result.

These report what the pipeline did (rows dropped, repeated timestamps);
they do not judge whether prices make business sense.
"""

from __future__ import annotations

import datetime

import polars as pl

from chartfeed.processing.normalizer import RejectReason
from chartfeed.processing.pipeline import IngestResult
from chartfeed.processing.schemas import series_to_frame
from chartfeed.validation.models import CheckResult, CheckStatus

# How many offending row indices / timestamps to include in details
_SAMPLE_SIZE = 20


def _iso(ts: int) -> str:
    return datetime.datetime.fromtimestamp(ts, tz=datetime.timezone.utc).isoformat()


def check_series_not_empty(result: IngestResult) -> CheckResult:
    if not result.series:
        return CheckResult(
            check_name="series_not_empty",
            status=CheckStatus.FAIL,
            message=f"No valid bars out of {result.row_count} row(s)",
        )
    return CheckResult(
        check_name="series_not_empty",
        status=CheckStatus.PASS,
        message=f"{len(result.series)} bar(s)",
    )


def check_rejected_rows(result: IngestResult) -> CheckResult:
    """Warn when rows were filtered out, with counts per reason."""
    if not result.rejected:
        return CheckResult(
            check_name="rejected_rows",
            status=CheckStatus.PASS,
            message=f"All {result.row_count} row(s) accepted",
        )

    by_reason = {reason.value: 0 for reason in RejectReason}
    for row in result.rejected:
        by_reason[row.reason.value] += 1

    return CheckResult(
        check_name="rejected_rows",
        status=CheckStatus.WARN,
        message=f"{result.dropped} of {result.row_count} row(s) dropped",
        details={
            "by_reason": by_reason,
            "row_indices": [r.index for r in result.rejected[:_SAMPLE_SIZE]],
        },
    )


def check_duplicate_timestamps(result: IngestResult) -> CheckResult:
    """Warn when several bars share a timestamp. They are kept, not merged."""
    df = series_to_frame(result.series)
    dupes = (
        df.group_by("time")
        .agg(pl.len().alias("count"))
        .filter(pl.col("count") > 1)
        .sort("time")
    )

    if dupes.is_empty():
        return CheckResult(
            check_name="duplicate_timestamps",
            status=CheckStatus.PASS,
            message="No repeated timestamps",
        )

    extra = int(dupes["count"].sum()) - len(dupes)
    return CheckResult(
        check_name="duplicate_timestamps",
        status=CheckStatus.WARN,
        message=f"{len(dupes)} timestamp(s) repeated ({extra} extra bar(s))",
        details={"times": [_iso(t) for t in dupes["time"].head(_SAMPLE_SIZE).to_list()]},
    )


def check_time_span(result: IngestResult) -> CheckResult:
    if not result.series:
        return CheckResult(
            check_name="time_span",
            status=CheckStatus.FAIL,
            message="Empty series has no time span",
        )

    first = result.series[0].time
    last = result.series[-1].time
    return CheckResult(
        check_name="time_span",
        status=CheckStatus.PASS,
        message=f"{_iso(first)} to {_iso(last)}",
        details={"first_time": first, "last_time": last, "bars": len(result.series)},
    )
