"""Breakout status classification.

Maps price position relative to the cloud into one of the statuses below,
evaluated in priority order, and applies the admission gate for that status.

Above the cloud:   FRESH_BREAKOUT (<= 1%), RECENT_BREAKOUT (<= 3%), STALE_BREAKOUT
Inside the cloud:  READY (>= 70% of cloud height), IN_CLOUD (>= 40%)
Below the cloud:   IMMINENT (>= -2%), APPROACHING (>= -5%), BUILDING (>= -10%)
Anything else:     NONE

Every admitted status requires bullish MACD, rising OBV and high volume.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger

from ..features.ichimoku import CloudSnapshot
from ..features.macd import MomentumSnapshot
from .scorer import distance_to_cloud_pct


class BreakoutStatus(str, Enum):
    """Position of price in the breakout life cycle."""

    IMMINENT = "imminent"
    READY = "ready"
    FRESH_BREAKOUT = "fresh-breakout"
    RECENT_BREAKOUT = "recent-breakout"
    APPROACHING = "approaching"
    BUILDING = "building"
    IN_CLOUD = "in-cloud"
    STALE_BREAKOUT = "stale-breakout"
    NONE = "none"


STATUS_LABELS = {
    BreakoutStatus.IMMINENT: "Breakout imminent below the cloud top",
    BreakoutStatus.READY: "Primed to break the cloud top",
    BreakoutStatus.FRESH_BREAKOUT: "Fresh breakout above the cloud",
    BreakoutStatus.RECENT_BREAKOUT: "Recent breakout above the cloud",
    BreakoutStatus.APPROACHING: "Approaching the cloud",
    BreakoutStatus.BUILDING: "Building momentum below the cloud",
    BreakoutStatus.IN_CLOUD: "Consolidating inside the cloud",
    BreakoutStatus.STALE_BREAKOUT: "Extended above the cloud",
    BreakoutStatus.NONE: "No breakout setup",
}

# Cloud-position and distance bands (percent)
READY_POSITION = 70.0
IN_CLOUD_POSITION = 40.0
FRESH_MAX_PCT = 1.0
RECENT_MAX_PCT = 3.0
IMMINENT_MIN_PCT = -2.0
APPROACHING_MIN_PCT = -5.0
BUILDING_MIN_PCT = -10.0

# Minimum breakout potential per status
IN_CLOUD_MIN_SCORE = 75
IMMINENT_MIN_SCORE = 80
APPROACHING_MIN_SCORE = 70
BUILDING_MIN_SCORE = 85


@dataclass(frozen=True)
class ClassificationResult:
    """Classification of one symbol at one point in time."""

    admitted: bool
    status: BreakoutStatus
    label: str
    distance_to_cloud_pct: float
    breakout_potential: int

    # Context attached by analyze()
    symbol: Optional[str] = None
    timeframe: Optional[str] = None
    price: Optional[float] = None
    volume_24h: Optional[float] = None
    cloud: Optional[CloudSnapshot] = None
    momentum: Optional[MomentumSnapshot] = None
    last_flow: Optional[float] = None


def is_macd_bullish(momentum: MomentumSnapshot) -> bool:
    """Fresh crossover, or MACD above signal with a positive histogram."""
    return momentum.bullish_crossover or (
        momentum.macd_line > momentum.signal_line and momentum.histogram > 0
    )


def cloud_position_pct(price: float, cloud: CloudSnapshot) -> float:
    """Position of price within the cloud (0 = bottom, 100 = top)."""
    if cloud.height <= 0:
        return 100.0
    return (price - cloud.cloud_bottom) / cloud.height * 100


def classify(
    price: float,
    cloud: CloudSnapshot,
    momentum: MomentumSnapshot,
    flow_is_rising: bool,
    high_volume: bool,
    breakout_potential: int,
) -> ClassificationResult:
    """Classify price action against the cloud and apply the admission gate.

    Args:
        price: Last traded price.
        cloud: Current cloud snapshot.
        momentum: Current MACD snapshot.
        flow_is_rising: Whether the latest OBV value rose.
        high_volume: Whether 24h volume exceeds the timeframe threshold.
        breakout_potential: Score from the breakout scorer.

    Returns:
        ClassificationResult (admitted or not).
    """
    distance = distance_to_cloud_pct(price, cloud)
    confirmed = is_macd_bullish(momentum) and flow_is_rising and high_volume

    if price > cloud.cloud_top:
        if distance <= FRESH_MAX_PCT:
            status, admitted = BreakoutStatus.FRESH_BREAKOUT, confirmed
        elif distance <= RECENT_MAX_PCT:
            status, admitted = BreakoutStatus.RECENT_BREAKOUT, confirmed
        else:
            status, admitted = BreakoutStatus.STALE_BREAKOUT, False

    elif price >= cloud.cloud_bottom:
        position = cloud_position_pct(price, cloud)
        if position >= READY_POSITION:
            status = BreakoutStatus.READY
            admitted = confirmed and price > cloud.base_line
        elif position >= IN_CLOUD_POSITION:
            status = BreakoutStatus.IN_CLOUD
            admitted = confirmed and breakout_potential > IN_CLOUD_MIN_SCORE
        else:
            status, admitted = BreakoutStatus.NONE, False

    elif distance >= IMMINENT_MIN_PCT:
        status = BreakoutStatus.IMMINENT
        admitted = (
            confirmed
            and price > cloud.conversion_line
            and breakout_potential > IMMINENT_MIN_SCORE
        )
    elif distance >= APPROACHING_MIN_PCT:
        status = BreakoutStatus.APPROACHING
        admitted = (
            confirmed
            and price > cloud.conversion_line
            and breakout_potential > APPROACHING_MIN_SCORE
        )
    elif distance >= BUILDING_MIN_PCT:
        status = BreakoutStatus.BUILDING
        admitted = confirmed and breakout_potential > BUILDING_MIN_SCORE
    else:
        status, admitted = BreakoutStatus.NONE, False

    logger.debug(
        f"Classified {status.value}: distance={distance:.2f}%, "
        f"score={breakout_potential}, admitted={admitted}"
    )

    return ClassificationResult(
        admitted=bool(admitted),
        status=status,
        label=STATUS_LABELS[status],
        distance_to_cloud_pct=distance,
        breakout_potential=breakout_potential,
    )
