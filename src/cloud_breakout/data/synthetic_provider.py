"""Synthetic candle generator for testing and demo scans."""

import zlib
from enum import Enum
from typing import Optional

import numpy as np
import pandas as pd
from loguru import logger

from ..config import TimeframeProfile
from .base import CandleSource, Ticker, TickerSource


class VolatilityRegime(str, Enum):
    """Volatility regime types."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TrendType(str, Enum):
    """Trend types."""

    NONE = "none"
    BULLISH = "bullish"
    BEARISH = "bearish"
    BREAKOUT = "breakout"


class SyntheticProvider(CandleSource, TickerSource):
    """Synthetic candle generator for controlled scan scenarios.

    Symbols carry regime hints, e.g. ``SYN_LOW_BULL`` or ``SYN_BREAKOUT``.
    Output for a given (seed, symbol, profile) is fully deterministic.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        base_price: float = 100.0,
        base_volume: float = 250_000.0,
        extra_candles: int = 20,
    ) -> None:
        """Initialize synthetic provider.

        Args:
            seed: Random seed for reproducibility.
            base_price: Starting price of every series.
            base_volume: Median per-candle volume.
            extra_candles: Candles generated beyond the profile minimum.
        """
        self.seed = seed if seed is not None else 0
        self.base_price = base_price
        self.base_volume = base_volume
        self.extra_candles = extra_candles

    def fetch_candles(self, symbol: str, profile: TimeframeProfile) -> pd.DataFrame:
        """Generate synthetic candles for a symbol."""
        n_bars = profile.min_candles + self.extra_candles
        rng = self._rng_for(symbol)
        volatility_regime, trend_type = self._parse_symbol(symbol)

        closes = self._generate_prices(rng, n_bars, volatility_regime, trend_type)
        highs, lows = self._generate_range(rng, closes)
        volume = self._generate_volume(rng, n_bars, trend_type)

        freq = {"1d": "1D", "4h": "4h", "1h": "1h"}.get(profile.timeframe, "1D")
        timestamps = pd.date_range(end="2024-06-30", periods=n_bars, freq=freq, tz="UTC")

        df = pd.DataFrame(
            {"high": highs, "low": lows, "close": closes, "volume": volume},
            index=pd.Index(timestamps, name="timestamp"),
        )
        logger.debug(f"Generated {len(df)} synthetic {profile.timeframe} candles for {symbol}")

        return df

    def fetch_ticker(self, symbol: str, profile: TimeframeProfile) -> Ticker:
        """Derive a ticker from the candle series of the scanned timeframe."""
        df = self.fetch_candles(symbol, profile)
        window = df.iloc[-profile.candles_per_day :]

        return Ticker(
            symbol=symbol,
            last_price=float(df["close"].iloc[-1]),
            volume_24h=float(window["volume"].sum()),
        )

    def _rng_for(self, symbol: str) -> np.random.Generator:
        """Per-symbol generator so series don't depend on call order."""
        return np.random.default_rng([self.seed, zlib.crc32(symbol.upper().encode())])

    def _parse_symbol(self, symbol: str) -> tuple[VolatilityRegime, TrendType]:
        """Parse synthetic symbol to extract regime hints.

        Args:
            symbol: Symbol string (e.g., 'SYN_HIGH_BULL').

        Returns:
            Tuple of (volatility_regime, trend_type).
        """
        parts = symbol.upper().split("_")

        volatility_regime = VolatilityRegime.MEDIUM
        trend_type = TrendType.NONE

        if "LOW" in parts:
            volatility_regime = VolatilityRegime.LOW
        elif "HIGH" in parts:
            volatility_regime = VolatilityRegime.HIGH

        if "BULL" in parts or "BULLISH" in parts:
            trend_type = TrendType.BULLISH
        elif "BEAR" in parts or "BEARISH" in parts:
            trend_type = TrendType.BEARISH
        elif "BREAKOUT" in parts:
            trend_type = TrendType.BREAKOUT

        return volatility_regime, trend_type

    def _generate_prices(
        self,
        rng: np.random.Generator,
        n_bars: int,
        volatility_regime: VolatilityRegime,
        trend_type: TrendType,
    ) -> np.ndarray:
        """Generate a close price path."""
        vol_map = {
            VolatilityRegime.LOW: 0.005,
            VolatilityRegime.MEDIUM: 0.015,
            VolatilityRegime.HIGH: 0.035,
        }
        returns = rng.normal(0, vol_map[volatility_regime], n_bars)

        if trend_type == TrendType.BULLISH:
            returns += 0.004
        elif trend_type == TrendType.BEARISH:
            returns -= 0.004
        elif trend_type == TrendType.BREAKOUT:
            # Slow decline, base, then a sharp recovery into the last candles
            ramp = max(n_bars // 10, 5)
            returns[: n_bars // 2] -= 0.003
            returns[-ramp:] = np.abs(returns[-ramp:]) + 0.012

        return self.base_price * np.exp(np.cumsum(returns))

    def _generate_range(
        self,
        rng: np.random.Generator,
        closes: np.ndarray,
    ) -> tuple[np.ndarray, np.ndarray]:
        """Generate highs and lows around the open/close body."""
        n = len(closes)
        opens = np.concatenate([[closes[0]], closes[:-1]])

        avg_range_pct = 0.01
        ranges = np.abs(rng.normal(avg_range_pct, avg_range_pct / 2, n))

        highs = np.maximum(opens, closes) * (1 + ranges / 2)
        lows = np.minimum(opens, closes) * (1 - ranges / 2)

        return highs, lows

    def _generate_volume(
        self,
        rng: np.random.Generator,
        n_bars: int,
        trend_type: TrendType,
    ) -> np.ndarray:
        """Generate log-normal volume, swelling into a breakout."""
        volume = rng.lognormal(mean=np.log(self.base_volume), sigma=0.4, size=n_bars)

        if trend_type == TrendType.BREAKOUT:
            ramp = max(n_bars // 10, 5)
            volume[-ramp:] *= np.linspace(1.5, 4.0, ramp)

        return volume
