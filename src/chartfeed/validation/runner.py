"""Runs every diagnostic check over an ingestion result."""

from __future__ import annotations

from chartfeed.processing.pipeline import IngestResult
from chartfeed.utils.logging import get_logger
from chartfeed.validation.checks import (
    check_duplicate_timestamps,
    check_rejected_rows,
    check_series_not_empty,
    check_time_span,
)
from chartfeed.validation.models import CheckReport

logger = get_logger(__name__)

ALL_CHECKS = [
    check_series_not_empty,
    check_rejected_rows,
    check_duplicate_timestamps,
    check_time_span,
]


def run_all_checks(result: IngestResult, source: str) -> CheckReport:
    report = CheckReport(source=source, results=[check(result) for check in ALL_CHECKS])
    logger.info("checks_complete", source=source, status=report.overall_status.value)
    return report
