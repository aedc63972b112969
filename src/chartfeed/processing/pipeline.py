"""End-to-end ingestion: raw table -> mapping -> validated bars -> sorted series."""

from __future__ import annotations

from dataclasses import dataclass, field

from chartfeed.errors import EmptyInputError
from chartfeed.indicators.sma import compute_sma
from chartfeed.ingest.reader import RawTable
from chartfeed.processing.assembler import assemble
from chartfeed.processing.columns import ColumnMapping, auto_detect
from chartfeed.processing.lookup import LegendSnapshot, legend_at
from chartfeed.processing.normalizer import RejectedRow, normalize
from chartfeed.processing.schemas import IndicatorPoint, RawRow, Series
from chartfeed.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class IngestResult:
    """Outcome of one ingestion call."""

    mapping: ColumnMapping
    series: Series
    row_count: int
    rejected: list[RejectedRow] = field(default_factory=list)

    @property
    def dropped(self) -> int:
        return len(self.rejected)


def ingest(
    table: RawTable,
    mapping: ColumnMapping | None = None,
    assume_millis: bool = False,
) -> IngestResult:
    """Run the full pipeline over a raw table.

    Uses the auto-detected mapping unless one is given. Raises
    EmptyInputError for a table without rows and MappingIncompleteError
    when a required role stays unmapped.
    """
    if table.is_empty:
        raise EmptyInputError("No rows parsed")

    if mapping is None:
        mapping = auto_detect(table.headers)

    normalized = normalize(table.rows, mapping, assume_millis)
    series = assemble(normalized.bars)
    return IngestResult(
        mapping=mapping,
        series=series,
        row_count=len(table),
        rejected=normalized.rejected,
    )


class IngestSession:
    """Holds the state behind an upload form: raw rows, mapping, current series.

    Every apply replaces the series wholesale. Results are committed against
    a generation number so that a result computed for a superseded request
    is discarded (last write wins).
    """

    def __init__(self, assume_millis: bool = False) -> None:
        self.assume_millis = assume_millis
        self.table: RawTable | None = None
        self.mapping = ColumnMapping()
        self.series: Series = []
        self.last_result: IngestResult | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def load(self, table: RawTable) -> IngestResult | None:
        """Take a new table, auto-detect its mapping, and apply it if complete."""
        if table.is_empty:
            raise EmptyInputError("No rows parsed")

        self.table = table
        self.mapping = auto_detect(table.headers)
        logger.info("table_loaded", rows=len(table), mapping=self.mapping.model_dump())

        if not self.mapping.is_complete:
            return None
        return self.apply()

    def override(self, **roles: str) -> ColumnMapping:
        """Manually reassign roles to columns, e.g. ``override(close="Adj Close")``."""
        self.mapping = self.mapping.merged(**roles)
        return self.mapping

    def apply(
        self,
        mapping: ColumnMapping | None = None,
        assume_millis: bool | None = None,
    ) -> IngestResult:
        """Normalize the loaded table with the current (or given) mapping."""
        if self.table is None:
            raise EmptyInputError("No table loaded")
        if mapping is not None:
            self.mapping = mapping
        if assume_millis is not None:
            self.assume_millis = assume_millis

        generation = self.begin()
        result = ingest(self.table, self.mapping, self.assume_millis)
        self.commit(generation, result)
        return result

    def begin(self) -> int:
        """Start a new ingestion request; any earlier in-flight one becomes stale."""
        self._generation += 1
        return self._generation

    def commit(self, generation: int, result: IngestResult) -> bool:
        """Publish a result unless a newer request has started since."""
        if generation != self._generation:
            logger.info(
                "stale_result_discarded",
                generation=generation,
                current=self._generation,
            )
            return False
        self.series = result.series
        self.last_result = result
        return True

    def clear(self) -> None:
        self.begin()
        self.table = None
        self.series = []
        self.last_result = None

    def preview(self, n: int = 10) -> list[RawRow]:
        if self.table is None:
            return []
        return list(self.table.rows[:n])

    def sma(self, period: int) -> list[IndicatorPoint]:
        return compute_sma(self.series, period)

    def legend(self, time: int, period: int) -> LegendSnapshot | None:
        return legend_at(self.series, self.sma(period), time)
