"""Pytest configuration and fixtures."""

import numpy as np
import pandas as pd
import pytest

from cloud_breakout.config import TimeframeProfile, get_profile
from cloud_breakout.features import CloudSnapshot, MomentumSnapshot


@pytest.fixture
def small_profile():
    """Tiny periods so indicator values can be checked by hand."""
    return TimeframeProfile(
        timeframe="1d",
        conversion_period=2,
        base_period=3,
        leading_span_b_period=4,
        displacement=3,
        fast_period=2,
        slow_period=3,
        signal_period=2,
        min_candles=7,
        volume_threshold=1000,
    )


@pytest.fixture
def daily_profile():
    """Built-in daily profile."""
    return get_profile("1d")


@pytest.fixture
def crossover_candles():
    """Seven candles: steady decline then a jump on the last close.

    With ``small_profile`` the cloud top is 8.5, the bottom 7.75, both
    Ichimoku lines are 7.0 and MACD crosses its signal on the last candle.
    """
    closes = np.array([10, 9, 8, 7, 6, 5, 9], dtype=float)
    return pd.DataFrame({
        "high": closes + 0.5,
        "low": closes - 0.5,
        "close": closes,
        "volume": np.full(len(closes), 100.0),
    })


@pytest.fixture
def sample_candles():
    """Random-walk daily candles long enough for the daily profile."""
    rng = np.random.default_rng(11)
    n = 120
    closes = 100 * np.exp(np.cumsum(rng.normal(0.001, 0.02, n)))

    df = pd.DataFrame({
        "high": closes * (1 + rng.uniform(0.001, 0.02, n)),
        "low": closes * (1 - rng.uniform(0.001, 0.02, n)),
        "close": closes,
        "volume": rng.uniform(50_000, 150_000, n),
    }, index=pd.date_range("2024-01-01", periods=n, freq="1D", tz="UTC"))

    return df


@pytest.fixture
def cloud():
    """Cloud from 95 to 100 with conversion 102 and base 98."""
    return CloudSnapshot(
        conversion_line=102.0,
        base_line=98.0,
        leading_span_a=100.0,
        leading_span_b=95.0,
        cloud_top=100.0,
        cloud_bottom=95.0,
    )


@pytest.fixture
def bullish_momentum():
    """MACD above signal with positive histogram, no fresh crossover."""
    return MomentumSnapshot(
        macd_line=1.0,
        signal_line=0.5,
        histogram=0.5,
        bullish_crossover=False,
    )


@pytest.fixture
def bearish_momentum():
    """MACD below signal."""
    return MomentumSnapshot(
        macd_line=-1.0,
        signal_line=-0.5,
        histogram=-0.5,
        bullish_crossover=False,
    )
