"""Pydantic configuration schemas for scanner parameters.

Timeframe profiles carry every indicator period used by the engine. The
scanner configuration is deserialized from YAML into these models.
"""

from pathlib import Path
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from ruamel.yaml import YAML

Timeframe = Literal["1d", "4h", "1h"]


class TimeframeProfile(BaseModel):
    """Indicator periods and thresholds for one candle timeframe."""

    model_config = ConfigDict(frozen=True)

    timeframe: str = Field(..., description="Timeframe identifier (e.g. '1d')")

    # Ichimoku
    conversion_period: int = Field(..., ge=1, description="Tenkan-sen period")
    base_period: int = Field(..., ge=1, description="Kijun-sen period")
    leading_span_b_period: int = Field(..., ge=1, description="Senkou span B period")
    displacement: int = Field(..., ge=1, description="Cloud displacement (candles)")

    # MACD
    fast_period: int = Field(..., ge=1, description="MACD fast EMA period")
    slow_period: int = Field(..., ge=1, description="MACD slow EMA period")
    signal_period: int = Field(..., ge=1, description="MACD signal EMA period")

    min_candles: int = Field(..., ge=1, description="Minimum candles for analysis")
    volume_threshold: float = Field(..., gt=0.0, description="24h volume significance level")

    @model_validator(mode="after")
    def validate_periods(self) -> "TimeframeProfile":
        """Ensure periods are mutually consistent."""
        if self.displacement != self.base_period:
            raise ValueError("displacement must equal base_period")
        if not self.conversion_period <= self.base_period <= self.leading_span_b_period:
            raise ValueError(
                "periods must satisfy conversion_period <= base_period <= leading_span_b_period"
            )
        if self.fast_period >= self.slow_period:
            raise ValueError("fast_period must be < slow_period")
        if self.min_candles < self.leading_span_b_period + self.displacement:
            raise ValueError("min_candles must be >= leading_span_b_period + displacement")
        return self

    @property
    def candles_per_day(self) -> int:
        """Number of candles covering 24 hours."""
        return {"1d": 1, "4h": 6, "1h": 24}.get(self.timeframe, 1)


PROFILES: Dict[str, TimeframeProfile] = {
    "1d": TimeframeProfile(
        timeframe="1d",
        conversion_period=9,
        base_period=26,
        leading_span_b_period=52,
        displacement=26,
        fast_period=12,
        slow_period=26,
        signal_period=9,
        min_candles=78,
        volume_threshold=1_000_000,
    ),
    "4h": TimeframeProfile(
        timeframe="4h",
        conversion_period=36,
        base_period=104,
        leading_span_b_period=208,
        displacement=104,
        fast_period=48,
        slow_period=104,
        signal_period=36,
        min_candles=312,
        volume_threshold=500_000,
    ),
    "1h": TimeframeProfile(
        timeframe="1h",
        conversion_period=72,
        base_period=208,
        leading_span_b_period=416,
        displacement=208,
        fast_period=72,
        slow_period=156,
        signal_period=54,
        min_candles=624,
        volume_threshold=200_000,
    ),
}


def get_profile(timeframe: str) -> TimeframeProfile:
    """Look up a built-in timeframe profile.

    Args:
        timeframe: Timeframe identifier ('1d', '4h' or '1h').

    Returns:
        The matching TimeframeProfile.

    Raises:
        ValueError: If the timeframe is unknown.
    """
    try:
        return PROFILES[timeframe]
    except KeyError:
        raise ValueError(
            f"Unknown timeframe: {timeframe}. Available: {list(PROFILES.keys())}"
        ) from None


class ScannerConfig(BaseModel):
    """Root scanner configuration."""

    name: str = Field("Cloud_Breakout", description="Scan name")
    version: str = Field("1.0", description="Configuration version")

    timeframe: Timeframe = Field("1d", description="Candle timeframe to scan")
    max_results: int = Field(30, ge=1, le=500, description="Keep at most N ranked results")
    batch_size: Optional[int] = Field(
        None, ge=1, le=100, description="Symbols per batch (default depends on timeframe)"
    )

    data_dir: Path = Field(Path("data"), description="Directory holding candle CSV files")
    symbols: Optional[list[str]] = Field(None, description="Symbols to scan (default: all files)")

    profiles: Dict[str, TimeframeProfile] = Field(
        default_factory=dict, description="Per-timeframe profile overrides"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", description="Logging level"
    )
    log_to_file: bool = Field(False, description="Write logs to file")

    @field_validator("symbols")
    @classmethod
    def validate_symbol_format(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Ensure symbols are uppercase."""
        if v is None:
            return v
        return [s.upper() for s in v]

    @model_validator(mode="after")
    def validate_overrides(self) -> "ScannerConfig":
        """Profile overrides must be keyed by their own timeframe."""
        for key, profile in self.profiles.items():
            if profile.timeframe != key:
                raise ValueError(
                    f"Profile override '{key}' declares timeframe '{profile.timeframe}'"
                )
        return self

    def profile(self) -> TimeframeProfile:
        """Resolve the active profile (override first, then built-in)."""
        if self.timeframe in self.profiles:
            return self.profiles[self.timeframe]
        return get_profile(self.timeframe)

    def resolved_batch_size(self) -> int:
        """Batch size, falling back to the timeframe default."""
        if self.batch_size is not None:
            return self.batch_size
        return 5 if self.timeframe == "1h" else 10


def load_config(path: Path | str) -> ScannerConfig:
    """Load and validate scanner configuration from YAML.

    Args:
        path: Path to YAML configuration file.

    Returns:
        Validated ScannerConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    yaml = YAML(typ="safe")
    with path.open("r") as f:
        raw_config = yaml.load(f) or {}

    try:
        config = ScannerConfig(**raw_config)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}") from e

    return config
