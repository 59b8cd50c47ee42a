"""Cloud Breakout Scanner.

Ranks assets showing an early Ichimoku cloud breakout by fusing cloud
position, MACD momentum and On-Balance-Volume flow into a 0-100 score and
a discrete status.
"""

__version__ = "0.1.0"
