"""Ichimoku cloud lines.

Conversion (tenkan) and base (kijun) lines are midpoints of the trailing
high/low extremes. The cloud acting on the current candle is the one that
was projected forward ``displacement`` candles ago, so the leading spans are
evaluated on the history window ending ``displacement`` candles before now.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd
from loguru import logger

from ..config import TimeframeProfile


@dataclass(frozen=True)
class CloudSnapshot:
    """Ichimoku lines and cloud boundaries for the current candle."""

    conversion_line: float
    base_line: float
    leading_span_a: float
    leading_span_b: float
    cloud_top: float
    cloud_bottom: float

    @property
    def height(self) -> float:
        """Cloud thickness in price units."""
        return self.cloud_top - self.cloud_bottom


def midpoint_line(
    highs: pd.Series | np.ndarray,
    lows: pd.Series | np.ndarray,
    period: int,
) -> Optional[float]:
    """Midpoint of the highest high and lowest low over the trailing window.

    Args:
        highs: High prices, oldest first.
        lows: Low prices, oldest first.
        period: Window length (most recent ``period`` candles).

    Returns:
        (max(high) + min(low)) / 2 over the window, or None if the input is
        shorter than ``period`` or the lengths differ.

    Examples:
        >>> midpoint_line([10, 12, 9], [5, 6, 4], 3)
        8.0
    """
    highs = np.asarray(highs, dtype=float)
    lows = np.asarray(lows, dtype=float)

    if period < 1 or len(highs) != len(lows) or len(highs) < period:
        return None

    highest = highs[-period:].max()
    lowest = lows[-period:].min()

    return float((highest + lowest) / 2)


def compute_cloud(
    highs: pd.Series | np.ndarray,
    lows: pd.Series | np.ndarray,
    profile: TimeframeProfile,
) -> Optional[CloudSnapshot]:
    """Calculate the Ichimoku cloud governing the latest candle.

    Args:
        highs: High prices, oldest first.
        lows: Low prices, oldest first.
        profile: Timeframe profile with Ichimoku periods.

    Returns:
        CloudSnapshot, or None if history is shorter than
        ``profile.min_candles`` or the inputs are misaligned.
    """
    highs = np.asarray(highs, dtype=float)
    lows = np.asarray(lows, dtype=float)

    if len(highs) != len(lows):
        logger.debug(f"Cloud input misaligned: {len(highs)} highs vs {len(lows)} lows")
        return None

    if len(highs) < profile.min_candles:
        logger.debug(f"Insufficient history for cloud: {len(highs)} < {profile.min_candles}")
        return None

    conversion = midpoint_line(highs, lows, profile.conversion_period)
    base = midpoint_line(highs, lows, profile.base_period)
    span_b_now = midpoint_line(highs, lows, profile.leading_span_b_period)

    # Window that projected today's cloud
    past_index = len(highs) - profile.displacement
    past_highs = highs[:past_index]
    past_lows = lows[:past_index]

    past_conversion = midpoint_line(past_highs, past_lows, profile.conversion_period)
    past_base = midpoint_line(past_highs, past_lows, profile.base_period)
    past_span_b = midpoint_line(past_highs, past_lows, profile.leading_span_b_period)

    if past_conversion is None:
        past_conversion = conversion
    if past_base is None:
        past_base = base
    if past_span_b is None:
        past_span_b = span_b_now

    leading_span_a = (past_conversion + past_base) / 2
    leading_span_b = past_span_b

    return CloudSnapshot(
        conversion_line=conversion,
        base_line=base,
        leading_span_a=leading_span_a,
        leading_span_b=leading_span_b,
        cloud_top=max(leading_span_a, leading_span_b),
        cloud_bottom=min(leading_span_a, leading_span_b),
    )


def compute_cloud_frame(
    df: pd.DataFrame,
    profile: TimeframeProfile,
    high_col: str = "high",
    low_col: str = "low",
) -> Optional[CloudSnapshot]:
    """Convenience function to compute the cloud on a DataFrame.

    Args:
        df: DataFrame with candle data.
        profile: Timeframe profile.
        high_col: Name of high column.
        low_col: Name of low column.

    Returns:
        CloudSnapshot or None.
    """
    return compute_cloud(df[high_col], df[low_col], profile)
