"""Test configuration loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cloud_breakout.config import PROFILES, ScannerConfig, TimeframeProfile, get_profile, load_config


def test_builtin_profiles():
    """Built-in profiles carry the documented periods."""
    daily = get_profile("1d")
    assert (daily.conversion_period, daily.base_period, daily.leading_span_b_period) == (9, 26, 52)
    assert (daily.fast_period, daily.slow_period, daily.signal_period) == (12, 26, 9)
    assert daily.displacement == 26
    assert daily.min_candles == 78
    assert daily.volume_threshold == 1_000_000

    four_hour = get_profile("4h")
    assert (four_hour.conversion_period, four_hour.base_period, four_hour.leading_span_b_period) == (36, 104, 208)
    assert (four_hour.fast_period, four_hour.slow_period, four_hour.signal_period) == (48, 104, 36)
    assert four_hour.min_candles == 312
    assert four_hour.volume_threshold == 500_000

    hourly = get_profile("1h")
    assert (hourly.conversion_period, hourly.base_period, hourly.leading_span_b_period) == (72, 208, 416)
    assert (hourly.fast_period, hourly.slow_period, hourly.signal_period) == (72, 156, 54)
    assert hourly.min_candles == 624
    assert hourly.volume_threshold == 200_000


@pytest.mark.parametrize("timeframe", list(PROFILES))
def test_profile_invariants(timeframe):
    """Displacement equals the base period and history covers the cloud."""
    profile = PROFILES[timeframe]

    assert profile.displacement == profile.base_period
    assert profile.min_candles == profile.leading_span_b_period + profile.displacement


def test_unknown_timeframe():
    """Unknown timeframe raises ValueError."""
    with pytest.raises(ValueError, match="Unknown timeframe"):
        get_profile("15m")


def test_profile_is_frozen():
    """Profiles cannot be mutated."""
    with pytest.raises(ValidationError):
        get_profile("1d").base_period = 30


def test_profile_validation():
    """Inconsistent periods are rejected."""
    base = get_profile("1d").model_dump()

    with pytest.raises(ValueError, match="displacement must equal base_period"):
        TimeframeProfile(**{**base, "displacement": 20})

    with pytest.raises(ValueError, match="fast_period must be < slow_period"):
        TimeframeProfile(**{**base, "fast_period": 30})

    with pytest.raises(ValueError, match="min_candles must be >="):
        TimeframeProfile(**{**base, "min_candles": 60})


def test_scanner_config_defaults():
    """Defaults resolve to the daily profile."""
    config = ScannerConfig()

    assert config.profile() == get_profile("1d")
    assert config.max_results == 30
    assert config.resolved_batch_size() == 10
    assert ScannerConfig(timeframe="1h").resolved_batch_size() == 5


def test_config_loading(tmp_path: Path):
    """Test loading config from YAML."""
    config_yaml = """
name: Test_Scan
version: "1.0"

timeframe: 4h
max_results: 10
data_dir: market
symbols: [btcusdt, ethusdt]

profiles:
  4h:
    timeframe: 4h
    conversion_period: 36
    base_period: 104
    leading_span_b_period: 208
    displacement: 104
    fast_period: 48
    slow_period: 104
    signal_period: 36
    min_candles: 312
    volume_threshold: 750000

log_level: DEBUG
"""

    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_yaml)

    config = load_config(config_file)

    assert config.name == "Test_Scan"
    assert config.symbols == ["BTCUSDT", "ETHUSDT"]
    assert config.data_dir == Path("market")
    assert config.profile().volume_threshold == 750_000
    assert config.log_level == "DEBUG"


def test_config_missing_file(tmp_path: Path):
    """Missing config raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_config_invalid(tmp_path: Path):
    """Validation errors surface as ValueError."""
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("timeframe: 15m\n")

    with pytest.raises(ValueError, match="Config validation failed"):
        load_config(config_file)


def test_override_key_mismatch():
    """Overrides must match their timeframe key."""
    with pytest.raises(ValueError, match="declares timeframe"):
        ScannerConfig(profiles={"4h": get_profile("1d")})
