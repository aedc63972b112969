"""Tests for column-role auto-detection."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from chartfeed.processing.columns import ColumnMapping, auto_detect


def test_detects_standard_headers():
    """Conventional OHLCV headers map one-to-one."""
    mapping = auto_detect(["Date", "Open", "High", "Low", "Close", "Volume"])
    assert mapping == ColumnMapping(
        date="Date", open="Open", high="High", low="Low", close="Close", volume="Volume"
    )
    assert mapping.is_complete


def test_detects_single_letter_headers():
    """Exchange-style o/h/l/c/v headers are recognized."""
    mapping = auto_detect(["timestamp", "o", "h", "l", "c", "v"])
    assert mapping.date == "timestamp"
    assert (mapping.open, mapping.high, mapping.low, mapping.close, mapping.volume) == (
        "o",
        "h",
        "l",
        "c",
        "v",
    )


def test_detection_is_case_insensitive_and_substring_based():
    """Upper-case headers with extra words still match."""
    mapping = auto_detect(["TRADE_DATE", "OPEN", "HIGH", "LOW", "LAST", "VOL"])
    assert mapping.date == "TRADE_DATE"
    assert mapping.open == "OPEN"
    assert mapping.close == "LAST"
    assert mapping.volume == "VOL"


def test_first_matching_column_wins():
    """'Close Time' matches both the date and close roles; first in order wins each."""
    mapping = auto_detect(["Close Time", "Open", "High", "Low", "Close"])
    assert mapping.date == "Close Time"
    assert mapping.close == "Close Time"


def test_missing_roles_are_empty():
    """Roles without a matching header stay empty and make the mapping incomplete."""
    mapping = auto_detect(["Date", "Price"])
    assert mapping.date == "Date"
    assert mapping.volume == ""
    assert not mapping.is_complete
    assert "open" in mapping.missing_roles()


def test_empty_headers():
    """No headers yields an all-empty mapping."""
    mapping = auto_detect([])
    assert mapping == ColumnMapping()
    assert mapping.missing_roles() == ("date", "open", "high", "low", "close")


def test_volume_is_optional_for_completeness():
    """A mapping without volume is still complete."""
    mapping = ColumnMapping(date="d", open="o", high="h", low="l", close="c")
    assert mapping.is_complete


def test_merged_overrides_roles():
    """merged() returns a new mapping and leaves the original alone."""
    mapping = auto_detect(["Date", "Open", "High", "Low", "Close", "Adj Close"])
    overridden = mapping.merged(close="Adj Close")
    assert overridden.close == "Adj Close"
    assert mapping.close == "Close"


def test_merged_rejects_unknown_role():
    """Only the six known roles can be overridden."""
    with pytest.raises(ValueError, match="Unknown role"):
        ColumnMapping().merged(price="Close")


def test_mapping_is_frozen():
    """Mappings cannot be mutated in place."""
    mapping = ColumnMapping(date="Date")
    with pytest.raises(ValidationError):
        mapping.date = "Other"
