"""On-Balance-Volume flow and its short-term trend."""

from enum import Enum
from typing import Optional

import numpy as np
import pandas as pd
from numba import jit

TREND_WINDOW = 5
STRONG_RISE_PCT = 0.02


class FlowTrend(str, Enum):
    """Direction of the recent OBV flow."""

    STRONG_UP = "strong-up"
    UP = "up"
    NEUTRAL = "neutral"
    DOWN = "down"


@jit(nopython=True)
def _accumulate(closes: np.ndarray, volumes: np.ndarray) -> np.ndarray:
    """Running OBV: add volume on up closes, subtract on down closes."""
    n = len(closes)
    flow = np.empty(n, dtype=np.float64)
    flow[0] = volumes[0]

    for i in range(1, n):
        if closes[i] > closes[i - 1]:
            flow[i] = flow[i - 1] + volumes[i]
        elif closes[i] < closes[i - 1]:
            flow[i] = flow[i - 1] - volumes[i]
        else:
            flow[i] = flow[i - 1]

    return flow


def compute_obv(
    closes: pd.Series | np.ndarray,
    volumes: pd.Series | np.ndarray,
) -> Optional[np.ndarray]:
    """Calculate the cumulative On-Balance-Volume series.

    Args:
        closes: Close prices, oldest first.
        volumes: Volumes aligned with ``closes``.

    Returns:
        Read-only array of OBV values (same length as input), or None if the
        inputs differ in length or hold fewer than two samples.

    Examples:
        >>> compute_obv([10, 11, 10, 12], [100, 50, 30, 70]).tolist()
        [100.0, 150.0, 120.0, 190.0]
    """
    closes = np.ascontiguousarray(closes, dtype=np.float64)
    volumes = np.ascontiguousarray(volumes, dtype=np.float64)

    if len(closes) != len(volumes) or len(closes) < 2:
        return None

    flow = _accumulate(closes, volumes)
    flow.setflags(write=False)
    return flow


def flow_rising(flow: np.ndarray) -> bool:
    """True if the latest OBV value is above the previous one."""
    if len(flow) < 2:
        return False
    return bool(flow[-1] > flow[-2])


def flow_trend(flow: np.ndarray) -> FlowTrend:
    """Classify the OBV trend over the last five samples.

    Counts rising transitions and "strong" rises (more than 2% of the prior
    value; any rise from zero counts as strong).

    Args:
        flow: OBV series.

    Returns:
        FlowTrend; NEUTRAL when fewer than five samples are available.
    """
    if len(flow) < TREND_WINDOW:
        return FlowTrend.NEUTRAL

    recent = np.asarray(flow[-TREND_WINDOW:], dtype=float)
    up_count = 0
    strong_count = 0

    for prev, cur in zip(recent[:-1], recent[1:]):
        if cur > prev:
            up_count += 1
            if cur - prev > abs(prev) * STRONG_RISE_PCT:
                strong_count += 1

    if up_count >= 4 and strong_count >= 2:
        return FlowTrend.STRONG_UP
    if up_count >= 3:
        return FlowTrend.UP
    if up_count >= 2:
        return FlowTrend.NEUTRAL
    return FlowTrend.DOWN
