"""Converts raw table rows into validated Bars using a column mapping."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from chartfeed.errors import InvalidBarError, MappingIncompleteError
from chartfeed.processing.columns import ColumnMapping
from chartfeed.processing.fields import is_nan, normalize_number, try_parse_date_to_sec
from chartfeed.processing.schemas import MAX_EPOCH_SECONDS, Bar, RawRow
from chartfeed.utils.logging import get_logger

logger = get_logger(__name__)


class RejectReason(str, Enum):
    BAD_DATE = "bad_date"
    BAD_PRICE = "bad_price"


@dataclass(frozen=True)
class RejectedRow:
    """Position (0-based, in input order) of a dropped row and why it was dropped."""

    index: int
    reason: RejectReason


@dataclass
class NormalizeResult:
    """Accepted bars in input order, plus the rows that were filtered out."""

    bars: list[Bar] = field(default_factory=list)
    rejected: list[RejectedRow] = field(default_factory=list)

    @property
    def dropped(self) -> int:
        return len(self.rejected)

    def count_by_reason(self) -> dict[RejectReason, int]:
        counts = {reason: 0 for reason in RejectReason}
        for row in self.rejected:
            counts[row.reason] += 1
        return counts


def _row_to_bar(row: RawRow, mapping: ColumnMapping, assume_millis: bool) -> Bar | RejectReason:
    time = try_parse_date_to_sec(row.get(mapping.date), assume_millis)
    if is_nan(time) or not 0 <= time <= MAX_EPOCH_SECONDS:
        return RejectReason.BAD_DATE

    prices = [
        normalize_number(row.get(column))
        for column in (mapping.open, mapping.high, mapping.low, mapping.close)
    ]
    if not all(math.isfinite(p) for p in prices):
        return RejectReason.BAD_PRICE

    volume = None
    if mapping.volume:
        parsed = normalize_number(row.get(mapping.volume))
        volume = parsed if math.isfinite(parsed) else None

    try:
        return Bar(time, *prices, volume=volume)
    except InvalidBarError:
        return RejectReason.BAD_PRICE


def normalize(
    raw_rows: Iterable[RawRow],
    mapping: ColumnMapping,
    assume_millis: bool = False,
) -> NormalizeResult:
    """Build Bars from raw rows, silently partitioning out malformed rows.

    A row is dropped when its date does not parse (or lies before the epoch)
    or when any of open/high/low/close is not a finite number. A bad volume
    never drops a row; it is stored as absent.

    Raises MappingIncompleteError if a required role is unmapped.
    """
    missing = mapping.missing_roles()
    if missing:
        logger.warning("mapping_incomplete", missing=list(missing))
        raise MappingIncompleteError(missing)

    result = NormalizeResult()
    for index, row in enumerate(raw_rows):
        outcome = _row_to_bar(row, mapping, assume_millis)
        if isinstance(outcome, Bar):
            result.bars.append(outcome)
        else:
            result.rejected.append(RejectedRow(index=index, reason=outcome))

    counts = result.count_by_reason()
    logger.info(
        "rows_normalized",
        accepted=len(result.bars),
        rejected=result.dropped,
        bad_date=counts[RejectReason.BAD_DATE],
        bad_price=counts[RejectReason.BAD_PRICE],
    )
    return result
