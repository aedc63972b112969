"""OHLC(V) CSV ingestion, normalization and rolling indicators."""

from chartfeed.indicators.sma import compute_sma
from chartfeed.processing.assembler import assemble
from chartfeed.processing.columns import ColumnMapping, auto_detect
from chartfeed.processing.fields import normalize_number, try_parse_date_to_sec
from chartfeed.processing.normalizer import normalize
from chartfeed.processing.pipeline import IngestSession, ingest
from chartfeed.processing.schemas import Bar, IndicatorPoint

__version__ = "0.1.0"

__all__ = [
    "Bar",
    "ColumnMapping",
    "IndicatorPoint",
    "IngestSession",
    "assemble",
    "auto_detect",
    "compute_sma",
    "ingest",
    "normalize",
    "normalize_number",
    "try_parse_date_to_sec",
]
