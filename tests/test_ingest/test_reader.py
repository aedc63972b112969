"""Tests for the CSV table reader."""

from __future__ import annotations

from pathlib import Path

import pytest

from chartfeed.errors import EmptyInputError, RawTableError
from chartfeed.ingest.reader import RawTable, parse_table, read_table


def test_read_table_keeps_cells_as_text(sample_csv: Path):
    """File cells arrive as untouched strings."""
    table = read_table(sample_csv)

    assert table.headers == ("Date", "Open", "High", "Low", "Close", "Volume")
    assert len(table) == 4
    assert table.rows[0]["Open"] == "₹21,650.00"
    assert table.rows[0]["Volume"] == "1,200,000"
    assert table.rows[3]["Close"] == "n/a"


def test_headers_are_trimmed():
    """Whitespace around header names is stripped."""
    table = parse_table(" Date , Close \n2024-01-01,1\n")
    assert table.headers == ("Date", "Close")
    assert table.rows[0] == {"Date": "2024-01-01", "Close": "1"}


def test_numeric_looking_cells_stay_strings():
    """No type inference is applied to cells."""
    table = parse_table("time,close\n1700000000000,00123.50\n")
    assert table.rows[0]["time"] == "1700000000000"
    assert table.rows[0]["close"] == "00123.50"


def test_blank_cells_become_none():
    """Empty cells are None."""
    table = parse_table("Date,Open,Close\n2024-01-01,,5\n")
    assert table.rows[0]["Open"] is None


def test_custom_delimiter(tmp_path: Path):
    """A non-comma delimiter is honoured."""
    path = tmp_path / "semi.csv"
    path.write_text("Date;Close\n31.12.2023;1.234,5\n", encoding="utf-8")
    table = read_table(path, delimiter=";")
    assert table.rows[0] == {"Date": "31.12.2023", "Close": "1.234,5"}


def test_header_only_file_is_empty_table():
    """Headers with no data rows give an empty table."""
    table = parse_table("Date,Open,High,Low,Close\n")
    assert table.is_empty
    assert table.headers == ("Date", "Open", "High", "Low", "Close")


def test_empty_content_raises_empty_input():
    """Completely empty content raises EmptyInputError."""
    with pytest.raises(EmptyInputError):
        parse_table("")


def test_missing_file_raises(tmp_path: Path):
    """A missing path surfaces as RawTableError."""
    with pytest.raises(RawTableError, match="No such file"):
        read_table(tmp_path / "nope.csv")


def test_from_records():
    """Tables can be built from in-memory records."""
    table = RawTable.from_records([{"Date": "2024-01-01", "Close": "1"}])
    assert table.headers == ("Date", "Close")
    assert len(table) == 1
    assert RawTable.from_records([]).is_empty
