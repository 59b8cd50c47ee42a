"""Configuration schemas and validation."""

from .schema import (
    PROFILES,
    ScannerConfig,
    TimeframeProfile,
    get_profile,
    load_config,
)

__all__ = [
    "PROFILES",
    "ScannerConfig",
    "TimeframeProfile",
    "get_profile",
    "load_config",
]
