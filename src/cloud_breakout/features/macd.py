"""MACD momentum oscillator.

The EMA is seeded with the first raw sample (not an SMA of the first
``period`` samples) and every MACD history value is the EMA difference over
its own full prefix. ``ema_path`` produces the EMA of every prefix in one
pass; element ``i`` equals ``ema(values[: i + 1], period)`` exactly because
each prefix repeats the same recurrence from the same seed.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd
from loguru import logger
from numba import jit

from ..config import TimeframeProfile


@dataclass(frozen=True)
class MomentumSnapshot:
    """MACD values at the latest candle."""

    macd_line: float
    signal_line: float
    histogram: float
    bullish_crossover: bool


@jit(nopython=True)
def _ema_path(values: np.ndarray, period: int) -> np.ndarray:
    """EMA of every prefix, seeded with values[0].

    ema(i) = values(i) * k + ema(i-1) * (1 - k),  k = 2 / (period + 1)

    Args:
        values: Input samples.
        period: Smoothing period.

    Returns:
        Array of the same length as ``values``.
    """
    n = len(values)
    out = np.empty(n, dtype=np.float64)
    if n == 0:
        return out

    multiplier = 2.0 / (period + 1)
    ema = values[0]
    out[0] = ema

    for i in range(1, n):
        ema = (values[i] * multiplier) + (ema * (1.0 - multiplier))
        out[i] = ema

    return out


def ema_path(values: pd.Series | np.ndarray, period: int) -> np.ndarray:
    """Exponential moving average of every prefix of ``values``.

    Args:
        values: Input samples, oldest first.
        period: Smoothing period (>= 1).

    Returns:
        Array where element i is the EMA of values[: i + 1].

    Raises:
        ValueError: If period < 1.
    """
    if period < 1:
        raise ValueError(f"EMA period must be >= 1, got {period}")

    values = np.ascontiguousarray(values, dtype=np.float64)
    return _ema_path(values, period)


def ema(values: pd.Series | np.ndarray, period: int) -> Optional[float]:
    """Exponential moving average of the whole sequence.

    Returns:
        Final EMA value, or None for empty input.
    """
    path = ema_path(values, period)
    if len(path) == 0:
        return None
    return float(path[-1])


def macd_history(
    closes: pd.Series | np.ndarray,
    profile: TimeframeProfile,
) -> Optional[np.ndarray]:
    """MACD line for every candle from index ``slow_period - 1`` onwards.

    Returns:
        Array of length ``len(closes) - slow_period + 1``, or None if there
        are fewer than ``slow_period`` closes.
    """
    closes = np.ascontiguousarray(closes, dtype=np.float64)

    if len(closes) < profile.slow_period:
        return None

    start = profile.slow_period - 1
    fast = ema_path(closes, profile.fast_period)
    slow = ema_path(closes, profile.slow_period)

    return fast[start:] - slow[start:]


def compute_macd(
    closes: pd.Series | np.ndarray,
    profile: TimeframeProfile,
) -> Optional[MomentumSnapshot]:
    """Calculate MACD, signal, histogram and a fresh bullish crossover.

    Args:
        closes: Close prices, oldest first.
        profile: Timeframe profile with MACD periods.

    Returns:
        MomentumSnapshot, or None if there are fewer than ``slow_period``
        closes.
    """
    history = macd_history(closes, profile)

    if history is None:
        logger.debug(f"Insufficient history for MACD: need {profile.slow_period} closes")
        return None

    signal_path = ema_path(history, profile.signal_period)

    macd_line = float(history[-1])
    signal_line = float(signal_path[-1])

    # Cross from below happened on the latest candle
    bullish_crossover = bool(
        len(history) >= 2
        and macd_line > signal_line
        and history[-2] <= signal_path[-2]
    )

    return MomentumSnapshot(
        macd_line=macd_line,
        signal_line=signal_line,
        histogram=macd_line - signal_line,
        bullish_crossover=bullish_crossover,
    )
