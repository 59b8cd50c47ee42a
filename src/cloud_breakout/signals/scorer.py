"""Breakout potential scoring.

Fuses cloud position, momentum, volume flow, traded volume and Ichimoku line
ordering into a single 0-100 score. Each component has a capped
contribution; the sum is clamped to [0, 100].
"""

from dataclasses import dataclass

import numpy as np
from loguru import logger

from ..config import TimeframeProfile
from ..features.ichimoku import CloudSnapshot
from ..features.macd import MomentumSnapshot
from ..features.obv import FlowTrend, flow_trend

MAX_SCORE = 100

FLOW_POINTS = {
    FlowTrend.STRONG_UP: 20,
    FlowTrend.UP: 14,
    FlowTrend.NEUTRAL: 7,
    FlowTrend.DOWN: 0,
}


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-component breakout score."""

    cloud_distance: int
    momentum: int
    flow: int
    volume: int
    line_order: int

    @property
    def raw_total(self) -> int:
        """Unclamped component sum."""
        return self.cloud_distance + self.momentum + self.flow + self.volume + self.line_order

    @property
    def total(self) -> int:
        """Component sum clamped to [0, 100]."""
        return int(min(max(self.raw_total, 0), MAX_SCORE))


def distance_to_cloud_pct(price: float, cloud: CloudSnapshot) -> float:
    """Percentage distance of price from the cloud top (negative = below)."""
    return (price - cloud.cloud_top) / cloud.cloud_top * 100


def cloud_distance_points(distance_pct: float) -> int:
    """Score proximity to the cloud ceiling (max 35).

    Peaks for prices just below to just above the cloud top and tapers in
    both directions; stale breakouts (> 3% above) get the floor value.
    """
    if -0.5 <= distance_pct <= 1:
        return 35
    if 1 < distance_pct <= 2 or -2 <= distance_pct < -0.5:
        return 28
    if 2 < distance_pct <= 3 or -5 <= distance_pct < -2:
        return 20
    if -10 <= distance_pct < -5:
        return 10
    return 5


def momentum_points(momentum: MomentumSnapshot) -> int:
    """Score MACD strength (max 25)."""
    above_signal = momentum.macd_line > momentum.signal_line
    positive_hist = momentum.histogram > 0

    if momentum.bullish_crossover:
        return 25
    if above_signal and positive_hist:
        return 20
    if positive_hist:
        return 12
    if above_signal:
        return 8
    return 0


def volume_points(volume: float, threshold: float) -> int:
    """Score 24h volume against the timeframe threshold (max 10)."""
    if volume > threshold * 3:
        return 10
    if volume > threshold * 2:
        return 8
    if volume > threshold:
        return 6
    if volume > threshold * 0.7:
        return 3
    return 0


def line_order_points(price: float, cloud: CloudSnapshot) -> int:
    """Score price and Ichimoku line alignment (max 10)."""
    points = 0
    if price > cloud.conversion_line:
        points += 3
    if price > cloud.base_line:
        points += 4
    if cloud.conversion_line > cloud.base_line:
        points += 3
    return points


def score_components(
    price: float,
    cloud: CloudSnapshot,
    momentum: MomentumSnapshot,
    flow: np.ndarray,
    volume: float,
    profile: TimeframeProfile,
) -> ScoreBreakdown:
    """Compute every component of the breakout score.

    Args:
        price: Last traded price.
        cloud: Current cloud snapshot.
        momentum: Current MACD snapshot.
        flow: OBV series.
        volume: 24h traded volume.
        profile: Timeframe profile (volume threshold).

    Returns:
        ScoreBreakdown with capped component scores.
    """
    return ScoreBreakdown(
        cloud_distance=cloud_distance_points(distance_to_cloud_pct(price, cloud)),
        momentum=momentum_points(momentum),
        flow=FLOW_POINTS[flow_trend(flow)],
        volume=volume_points(volume, profile.volume_threshold),
        line_order=line_order_points(price, cloud),
    )


def score_breakout(
    price: float,
    cloud: CloudSnapshot,
    momentum: MomentumSnapshot,
    flow: np.ndarray,
    volume: float,
    profile: TimeframeProfile,
) -> int:
    """Breakout potential in [0, 100] (arguments as ``score_components``)."""
    breakdown = score_components(price, cloud, momentum, flow, volume, profile)

    logger.debug(
        f"Breakout score={breakdown.total} (cloud={breakdown.cloud_distance}, "
        f"momentum={breakdown.momentum}, flow={breakdown.flow}, "
        f"volume={breakdown.volume}, lines={breakdown.line_order})"
    )

    return breakdown.total
