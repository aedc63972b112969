"""Raw table input."""

from chartfeed.ingest.reader import RawTable, parse_table, read_table

__all__ = ["RawTable", "parse_table", "read_table"]
