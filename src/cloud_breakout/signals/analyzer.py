"""Per-symbol breakout analysis.

Single entry point tying the indicator layer, scorer and classifier
together. Pure: identical inputs always produce identical results.
"""

import dataclasses
import math
from typing import Optional, Sequence

import pandas as pd
from loguru import logger

from ..config import TimeframeProfile
from ..data.base import CandleRow, candles_to_frame
from ..features.ichimoku import compute_cloud
from ..features.macd import compute_macd
from ..features.obv import compute_obv, flow_rising
from .classifier import ClassificationResult, classify
from .scorer import score_breakout


def analyze(
    symbol: str,
    candles: Sequence[CandleRow] | pd.DataFrame,
    last_price: float,
    volume_24h: float,
    profile: TimeframeProfile,
) -> Optional[ClassificationResult]:
    """Analyze one symbol for an early cloud breakout.

    Args:
        symbol: Trading symbol (carried on the result).
        candles: Candle history, oldest first.
        last_price: Last traded price.
        volume_24h: 24h traded volume.
        profile: Timeframe profile.

    Returns:
        Admitted ClassificationResult, or None if history is insufficient,
        candles are malformed, inputs are unusable, or the symbol fails its
        admission gate.
    """
    if not math.isfinite(last_price) or last_price <= 0:
        logger.debug(f"{symbol}: invalid last price {last_price}")
        return None

    if not math.isfinite(volume_24h) or volume_24h < 0:
        logger.debug(f"{symbol}: invalid 24h volume {volume_24h}")
        return None

    try:
        df = candles_to_frame(candles)
    except (TypeError, ValueError) as e:
        logger.debug(f"{symbol}: malformed candles: {e}")
        return None

    if len(df) < profile.min_candles:
        logger.debug(f"{symbol}: {len(df)} candles < {profile.min_candles} required")
        return None

    cloud = compute_cloud(df["high"], df["low"], profile)
    if cloud is None:
        return None

    if cloud.cloud_top <= 0:
        logger.debug(f"{symbol}: non-positive cloud top {cloud.cloud_top}")
        return None

    momentum = compute_macd(df["close"], profile)
    if momentum is None:
        return None

    flow = compute_obv(df["close"], df["volume"])
    if flow is None:
        return None

    potential = score_breakout(last_price, cloud, momentum, flow, volume_24h, profile)

    result = classify(
        price=last_price,
        cloud=cloud,
        momentum=momentum,
        flow_is_rising=flow_rising(flow),
        high_volume=volume_24h > profile.volume_threshold,
        breakout_potential=potential,
    )

    if not result.admitted:
        return None

    return dataclasses.replace(
        result,
        symbol=symbol,
        timeframe=profile.timeframe,
        price=last_price,
        volume_24h=volume_24h,
        cloud=cloud,
        momentum=momentum,
        last_flow=float(flow[-1]),
    )
