"""Test EMA and MACD calculations."""

import numpy as np
import pytest

from cloud_breakout.features.macd import compute_macd, ema, ema_path, macd_history


def reference_ema(values, period):
    """Plain-Python EMA seeded with the first sample."""
    multiplier = 2 / (period + 1)
    result = values[0]
    for v in values[1:]:
        result = (v * multiplier) + (result * (1 - multiplier))
    return result


def test_ema_seeded_with_first_sample():
    """First output is the first raw sample, not an SMA."""
    path = ema_path([4.0, 8.0, 6.0], period=3)

    assert path[0] == 4.0
    assert path[1] == pytest.approx(6.0)
    assert path[2] == pytest.approx(6.0)


def test_ema_path_matches_prefix_recomputation():
    """Each path element equals the EMA recomputed over its own prefix."""
    rng = np.random.default_rng(3)
    values = rng.uniform(50, 150, 60)

    path = ema_path(values, period=12)

    for i in range(len(values)):
        assert path[i] == pytest.approx(reference_ema(values[: i + 1], 12), rel=1e-12)


def test_ema_constant_input():
    """Constant input stays constant."""
    path = ema_path(np.full(30, 42.5), period=9)

    assert np.allclose(path, 42.5)


def test_ema_empty_input():
    """Empty input has no EMA."""
    assert ema([], period=5) is None


def test_ema_invalid_period():
    """Period must be positive."""
    with pytest.raises(ValueError, match="EMA period must be >= 1"):
        ema_path([1.0, 2.0], period=0)


def test_macd_hand_computed(small_profile):
    """Three closes give a single MACD history sample."""
    snapshot = compute_macd([1.0, 2.0, 3.0], small_profile)

    # fast EMA 23/9, slow EMA 9/4
    assert snapshot.macd_line == pytest.approx(23 / 9 - 9 / 4)
    assert snapshot.signal_line == pytest.approx(snapshot.macd_line)
    assert snapshot.histogram == 0.0
    assert snapshot.bullish_crossover is False


def test_macd_insufficient_history(small_profile):
    """Fewer closes than the slow period returns None."""
    assert compute_macd([1.0, 2.0], small_profile) is None
    assert macd_history([1.0, 2.0], small_profile) is None


def test_macd_history_length(small_profile):
    """History starts at index slow_period - 1."""
    history = macd_history(np.arange(1, 11, dtype=float), small_profile)

    assert len(history) == 10 - small_profile.slow_period + 1


def test_macd_bullish_crossover(small_profile, crossover_candles):
    """A jump after a decline crosses MACD above its signal."""
    snapshot = compute_macd(crossover_candles["close"], small_profile)

    assert snapshot.macd_line == pytest.approx(0.3482, abs=1e-3)
    assert snapshot.signal_line == pytest.approx(0.0812, abs=1e-3)
    assert snapshot.bullish_crossover is True


def test_macd_no_crossover_in_steady_uptrend(small_profile):
    """MACD already above signal is not a fresh crossover."""
    snapshot = compute_macd(np.arange(1, 11, dtype=float), small_profile)

    assert snapshot.macd_line > snapshot.signal_line
    assert snapshot.histogram > 0
    assert snapshot.bullish_crossover is False


def test_macd_matches_reference(sample_candles, daily_profile):
    """MACD agrees with prefix-by-prefix recomputation."""
    closes = sample_candles["close"].to_numpy()
    p = daily_profile

    history = [
        reference_ema(closes[: i + 1], p.fast_period) - reference_ema(closes[: i + 1], p.slow_period)
        for i in range(p.slow_period - 1, len(closes))
    ]
    signal = reference_ema(history, p.signal_period)
    crossover = history[-1] > signal and history[-2] <= reference_ema(history[:-1], p.signal_period)

    snapshot = compute_macd(closes, p)

    assert snapshot.macd_line == pytest.approx(history[-1], rel=1e-9)
    assert snapshot.signal_line == pytest.approx(signal, rel=1e-9)
    assert snapshot.histogram == snapshot.macd_line - snapshot.signal_line
    assert snapshot.bullish_crossover == crossover
