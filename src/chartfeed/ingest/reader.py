"""Delimited-text reader producing raw, untyped rows for the pipeline."""

from __future__ import annotations

import io
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

import polars as pl

from chartfeed.errors import EmptyInputError, RawTableError
from chartfeed.processing.schemas import RawRow
from chartfeed.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RawTable:
    """Header names plus rows keyed by header. Cells are strings or None."""

    headers: tuple[str, ...]
    rows: tuple[RawRow, ...]

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, object]]) -> RawTable:
        """Wrap in-memory rows; headers come from the first row's keys."""
        headers = tuple(records[0].keys()) if records else ()
        return cls(headers=headers, rows=tuple(records))


def _frame_to_table(df: pl.DataFrame) -> RawTable:
    if df.width:
        # Drop lines where every cell is blank
        df = df.filter(~pl.all_horizontal(pl.all().is_null()))
    return RawTable(headers=tuple(df.columns), rows=tuple(df.iter_rows(named=True)))


def _read(source, delimiter: str, encoding: str) -> pl.DataFrame:
    try:
        df = pl.read_csv(
            source,
            separator=delimiter,
            encoding=encoding,
            infer_schema_length=0,
            truncate_ragged_lines=True,
        )
        return df.rename({c: c.strip() for c in df.columns})
    except pl.exceptions.NoDataError as e:
        raise EmptyInputError(f"No rows parsed from {source!r}") from e
    except (pl.exceptions.PolarsError, OSError, UnicodeDecodeError) as e:
        raise RawTableError(f"Could not parse table {source!r}: {e}") from e


def read_table(path: Path, delimiter: str = ",", encoding: str = "utf8") -> RawTable:
    """Read a CSV file with every column kept as text.

    Raises RawTableError when the file cannot be read or parsed, and
    EmptyInputError when it has no content at all. A header-only file
    yields an empty table.
    """
    path = Path(path)
    if not path.is_file():
        raise RawTableError(f"No such file: {path}")

    table = _frame_to_table(_read(path, delimiter, encoding))
    logger.info("table_read", path=str(path), rows=len(table), columns=len(table.headers))
    return table


def parse_table(text: str, delimiter: str = ",") -> RawTable:
    """Same as read_table, for CSV content already in memory."""
    data = io.BytesIO(text.encode("utf-8"))
    return _frame_to_table(_read(data, delimiter, "utf8"))
