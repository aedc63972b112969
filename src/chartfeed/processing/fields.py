"""Cell-level parsers: locale-formatted numbers and mixed-format dates.

Both parsers are total: malformed input yields the NaN sentinel rather than
raising, so the row normalizer can decide what to drop.
"""

from __future__ import annotations

import datetime
import math
import re
from email.utils import parsedate_to_datetime

from chartfeed.processing.schemas import Cell

NAN = float("nan")

# Thousands separators, whitespace and currency glyphs are stripped before parsing.
CURRENCY_GLYPHS = "₹$€£¥"
_STRIP_RE = re.compile(rf"[,\s{re.escape(CURRENCY_GLYPHS)}]")

# Some exports write "--" for "no value".
_PLACEHOLDER = "--"

# Longest leading numeric prefix, parseFloat-style: "12.5abc" -> 12.5
_NUMERIC_PREFIX_RE = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_ALL_DIGITS_RE = re.compile(r"[0-9]+")

# More digits than this means the value is in milliseconds.
_MAX_SECONDS_DIGITS = 10

# Longer digit runs cannot be a timestamp in either unit.
_MAX_TIMESTAMP_DIGITS = 20


def is_nan(value: float) -> bool:
    """True for the NaN sentinel returned by the parsers."""
    return isinstance(value, float) and math.isnan(value)


def normalize_number(cell: Cell) -> float:
    """Parse a raw cell into a float.

    Strips commas, whitespace and currency glyphs, collapses the "--"
    placeholder, then parses as far as a valid number extends. Numbers pass
    through unchanged. Returns NaN for None or when nothing numeric remains.

    >>> normalize_number("₹1,234.50")
    1234.5
    """
    if cell is None:
        return NAN
    if isinstance(cell, (int, float)) and not isinstance(cell, bool):
        return float(cell)

    cleaned = _STRIP_RE.sub("", str(cell)).replace(_PLACEHOLDER, "")
    match = _NUMERIC_PREFIX_RE.match(cleaned)
    if match is None:
        return NAN
    return float(match.group(0))


def try_parse_date_to_sec(cell: Cell, assume_millis: bool = False) -> int | float:
    """Convert a date/time cell to integer epoch seconds (UTC), or NaN.

    Tried in order, first match wins:

    1. all digits: a Unix timestamp, divided by 1000 when ``assume_millis``
       is set or the value has more than 10 digits;
    2. ISO-8601 or RFC 2822 text (naive values are taken as UTC);
    3. three-part dates split on ``/``, ``.`` or ``-``: ``YYYY`` last means
       D/M/Y, ``YYYY`` first means Y/M/D, anything else defaults to D/M/Y.

    Two-digit years are not corrected; they land in the D/M/Y default and
    do not form a valid date.
    """
    if cell is None:
        return NAN
    if isinstance(cell, float) and cell.is_integer():
        cell = int(cell)
    text = str(cell).strip()

    if _ALL_DIGITS_RE.fullmatch(text):
        if len(text) > _MAX_TIMESTAMP_DIGITS:
            return NAN
        value = int(text)
        if assume_millis or len(text) > _MAX_SECONDS_DIGITS:
            return value // 1000
        return value

    parsed = _parse_standard(text)
    if parsed is not None:
        return math.floor(parsed.timestamp())

    parts = text.replace(".", "/").replace("-", "/").split("/")
    if len(parts) == 3:
        first, middle, last = parts
        if len(last) == 4:
            day, month, year = first, middle, last
        elif len(first) == 4:
            year, month, day = first, middle, last
        else:
            day, month, year = first, middle, last
        rebuilt = f"{year}-{month.zfill(2)}-{day.zfill(2)}"
        try:
            date = datetime.date.fromisoformat(rebuilt)
        except ValueError:
            return NAN
        midnight = datetime.datetime.combine(date, datetime.time(), tzinfo=datetime.timezone.utc)
        return math.floor(midnight.timestamp())

    return NAN


def _parse_standard(text: str) -> datetime.datetime | None:
    """ISO-8601 first, then RFC 2822. Returns an aware datetime or None."""
    if not text:
        return None

    iso_text = text[:-1] + "+00:00" if text[-1] in "Zz" else text
    try:
        parsed = datetime.datetime.fromisoformat(iso_text)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, OverflowError):
            return None
        if parsed is None:
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed
