"""Data models for ingestion diagnostics."""

from __future__ import annotations

import datetime
from collections import Counter
from enum import Enum

from pydantic import BaseModel, Field


class CheckStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


# Worst status first
_SEVERITY = (CheckStatus.FAIL, CheckStatus.WARN, CheckStatus.PASS)


class CheckResult(BaseModel):
    check_name: str
    status: CheckStatus
    message: str
    details: dict | None = None


class CheckReport(BaseModel):
    """All diagnostics for one ingested file."""

    source: str
    timestamp: datetime.datetime = Field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )
    results: list[CheckResult]

    @property
    def overall_status(self) -> CheckStatus:
        statuses = {r.status for r in self.results}
        return next((s for s in _SEVERITY if s in statuses), CheckStatus.PASS)

    def status_counts(self) -> dict[CheckStatus, int]:
        counts = Counter(r.status for r in self.results)
        return {status: counts.get(status, 0) for status in CheckStatus}
