"""Base market data interfaces and schemas."""

from abc import ABC, abstractmethod
from typing import Sequence, Tuple, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from ..config import TimeframeProfile

CANDLE_COLUMNS = ["high", "low", "close", "volume"]


class DataUnavailableError(RuntimeError):
    """Raised when a source has no usable data for a symbol."""


class Candle(BaseModel):
    """One time bucket of price/volume data."""

    model_config = ConfigDict(frozen=True)

    high: float = Field(..., description="High price")
    low: float = Field(..., description="Low price")
    close: float = Field(..., description="Closing price")
    volume: float = Field(..., ge=0.0, description="Traded volume")


class Ticker(BaseModel):
    """Latest traded price and rolling 24h volume."""

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., description="Instrument symbol")
    last_price: float = Field(..., description="Last traded price")
    volume_24h: float = Field(..., ge=0.0, description="24 hour traded volume")


CandleRow = Union[Candle, Tuple[float, float, float, float]]


def candles_to_frame(candles: Sequence[CandleRow] | pd.DataFrame) -> pd.DataFrame:
    """Normalize candles into a DataFrame with the standard columns.

    Args:
        candles: Sequence of Candle models or (high, low, close, volume)
            tuples, oldest first, or a DataFrame holding at least the high,
            low, close and volume columns.

    Returns:
        DataFrame with float columns high, low, close, volume.

    Raises:
        ValueError: If a DataFrame is missing required columns or a row is
            not four numeric values.
    """
    if isinstance(candles, pd.DataFrame):
        missing = [c for c in CANDLE_COLUMNS if c not in candles.columns]
        if missing:
            raise ValueError(f"Candle frame missing columns: {missing}")
        return candles[CANDLE_COLUMNS].astype(float)

    rows = [
        (c.high, c.low, c.close, c.volume) if isinstance(c, Candle) else tuple(c)
        for c in candles
    ]
    if any(len(row) != len(CANDLE_COLUMNS) for row in rows):
        raise ValueError(f"Candle rows must hold {len(CANDLE_COLUMNS)} values: {CANDLE_COLUMNS}")

    return pd.DataFrame(
        rows,
        columns=CANDLE_COLUMNS,
        dtype=float,
    )


class CandleSource(ABC):
    """Provides ordered candle history for a symbol."""

    @abstractmethod
    def fetch_candles(self, symbol: str, profile: TimeframeProfile) -> pd.DataFrame:
        """Fetch candles for a symbol on the profile's timeframe.

        Args:
            symbol: Trading symbol.
            profile: Timeframe profile (selects interval and history length).

        Returns:
            DataFrame with columns high, low, close, volume ordered oldest to
            newest.

        Raises:
            DataUnavailableError: If no candles are available.
        """
        pass


class TickerSource(ABC):
    """Provides last price and 24h volume for a symbol."""

    @abstractmethod
    def fetch_ticker(self, symbol: str, profile: TimeframeProfile) -> Ticker:
        """Fetch the latest ticker.

        Args:
            symbol: Trading symbol.
            profile: Timeframe profile of the scan; sources that derive the
                ticker from candles use the same series.

        Raises:
            DataUnavailableError: If the symbol has no ticker.
        """
        pass
