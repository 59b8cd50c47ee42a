"""Test the batch scanner."""

import pandas as pd
import pytest

from cloud_breakout.data import CandleSource, DataUnavailableError, Ticker, TickerSource
from cloud_breakout.scan import BreakoutScanner
from cloud_breakout.signals import BreakoutStatus


class FakeMarket(CandleSource, TickerSource):
    """In-memory market with per-symbol candles and tickers."""

    def __init__(self, candles, tickers):
        self.candles = candles
        self.tickers = tickers
        self.requested = []
        self.ticker_profiles = []

    def fetch_candles(self, symbol, profile):
        self.requested.append(symbol)
        value = self.candles.get(symbol)
        if value is None:
            raise DataUnavailableError(f"no candles for {symbol}")
        if isinstance(value, Exception):
            raise value
        return value

    def fetch_ticker(self, symbol, profile):
        self.ticker_profiles.append(profile)
        if symbol not in self.tickers:
            raise DataUnavailableError(f"no ticker for {symbol}")
        return self.tickers[symbol]


@pytest.fixture
def market(crossover_candles):
    """Two admitted symbols, one rejected, one short, two failing."""
    return FakeMarket(
        candles={
            "FRESH": crossover_candles,
            "READY": crossover_candles,
            "STALE": crossover_candles,
            "SHORT": crossover_candles.iloc[:3],
            "BROKEN": RuntimeError("corrupt file"),
        },
        tickers={
            "FRESH": Ticker(symbol="FRESH", last_price=8.55, volume_24h=5000),
            "READY": Ticker(symbol="READY", last_price=8.4, volume_24h=5000),
            "STALE": Ticker(symbol="STALE", last_price=9.0, volume_24h=5000),
            "SHORT": Ticker(symbol="SHORT", last_price=8.55, volume_24h=5000),
            "BROKEN": Ticker(symbol="BROKEN", last_price=8.55, volume_24h=5000),
        },
    )


def test_scan_isolates_failures(market, small_profile):
    """Failing symbols are counted and the scan continues."""
    scanner = BreakoutScanner(market, market, small_profile, batch_size=2)

    report = scanner.scan(["BROKEN", "FRESH", "MISSING", "STALE", "SHORT", "READY"])

    assert report.scanned == 6
    assert report.admitted == 2
    assert report.rejected == 2
    assert report.failed == 2
    assert set(report.failures) == {"BROKEN", "MISSING"}
    assert "corrupt file" in report.failures["BROKEN"]
    assert market.requested == ["BROKEN", "FRESH", "MISSING", "STALE", "SHORT", "READY"]


def test_scan_ranks_results(market, small_profile):
    """Ready outranks fresh breakout regardless of input order."""
    scanner = BreakoutScanner(market, market, small_profile)

    report = scanner.scan(["FRESH", "READY"])

    assert [r.symbol for r in report.results] == ["READY", "FRESH"]
    assert report.results[0].status == BreakoutStatus.READY
    assert report.timeframe == "1d"


def test_scan_truncates(market, small_profile):
    """Only the top max_results are kept."""
    scanner = BreakoutScanner(market, market, small_profile, max_results=1)

    report = scanner.scan(["FRESH", "READY"])

    assert report.admitted == 2
    assert [r.symbol for r in report.results] == ["READY"]


def test_scan_empty(market, small_profile):
    """No symbols gives an empty report."""
    report = BreakoutScanner(market, market, small_profile).scan([])

    assert report.scanned == 0
    assert report.results == []


def test_default_batch_size(market, small_profile):
    """Hourly scans use smaller batches."""
    hourly = small_profile.model_copy(update={"timeframe": "1h"})

    assert BreakoutScanner(market, market, small_profile).batch_size == 10
    assert BreakoutScanner(market, market, hourly).batch_size == 5


def test_invalid_max_results(market, small_profile):
    """max_results must be positive."""
    with pytest.raises(ValueError, match="max_results must be >= 1"):
        BreakoutScanner(market, market, small_profile, max_results=0)


def test_tickers_use_scanned_profile(market, small_profile):
    """Tickers are fetched on the same timeframe as the candles."""
    four_hour = small_profile.model_copy(update={"timeframe": "4h"})

    BreakoutScanner(market, market, four_hour).scan(["FRESH", "READY"])

    assert market.ticker_profiles == [four_hour, four_hour]
