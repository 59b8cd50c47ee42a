"""Market data layer.

Candle/ticker schemas, the source interfaces the scanner consumes, and
offline implementations (local CSV files, synthetic generator).
"""

from .base import (
    Candle,
    CandleSource,
    DataUnavailableError,
    Ticker,
    TickerSource,
    candles_to_frame,
)
from .csv_provider import CsvMarketData
from .synthetic_provider import SyntheticProvider

__all__ = [
    "Candle",
    "CandleSource",
    "DataUnavailableError",
    "Ticker",
    "TickerSource",
    "candles_to_frame",
    "CsvMarketData",
    "SyntheticProvider",
]
