"""Exceptions surfaced by the ingestion pipeline.

Per-row problems are never raised: the normalizer records them as rejections.
Only input-level problems (unreadable table, no rows, unmapped roles) reach
the caller as exceptions.
"""

from __future__ import annotations


class ChartfeedError(Exception):
    """Base exception for all chartfeed failures."""


class RawTableError(ChartfeedError):
    """The delimited-text source could not be read or parsed."""


class EmptyInputError(ChartfeedError):
    """The raw table contained no data rows."""


class MappingIncompleteError(ChartfeedError):
    """One or more required roles (date/open/high/low/close) are unmapped."""

    def __init__(self, missing: tuple[str, ...]) -> None:
        self.missing = missing
        super().__init__(f"Column mapping incomplete, unmapped role(s): {', '.join(missing)}")


class InvalidBarError(ChartfeedError, ValueError):
    """A Bar was constructed with a non-finite price or an invalid time."""
