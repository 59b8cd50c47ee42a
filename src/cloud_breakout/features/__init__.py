"""Indicator computations: Ichimoku cloud, MACD and On-Balance-Volume."""

from .ichimoku import CloudSnapshot, compute_cloud, compute_cloud_frame, midpoint_line
from .macd import MomentumSnapshot, compute_macd, ema, ema_path, macd_history
from .obv import FlowTrend, compute_obv, flow_rising, flow_trend

__all__ = [
    "CloudSnapshot",
    "compute_cloud",
    "compute_cloud_frame",
    "midpoint_line",
    "MomentumSnapshot",
    "compute_macd",
    "ema",
    "ema_path",
    "macd_history",
    "FlowTrend",
    "compute_obv",
    "flow_rising",
    "flow_trend",
]
