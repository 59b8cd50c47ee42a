"""Batch scanner over a caller-supplied symbol list.

Fetches candles and tickers from injected sources, runs the per-symbol
analysis and ranks what is admitted. A failing symbol is logged and counted;
it never aborts the scan.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from loguru import logger

from ..config import TimeframeProfile
from ..data.base import CandleSource, DataUnavailableError, TickerSource
from ..signals.analyzer import analyze
from ..signals.classifier import ClassificationResult
from ..signals.ranker import rank_results


@dataclass
class ScanReport:
    """Outcome of a scan."""

    timeframe: str
    results: List[ClassificationResult] = field(default_factory=list)

    scanned: int = 0
    admitted: int = 0
    rejected: int = 0
    failed: int = 0

    failures: dict[str, str] = field(default_factory=dict)


class BreakoutScanner:
    """Scans symbols for early cloud breakouts.

    Example:
        >>> provider = SyntheticProvider(seed=7)
        >>> scanner = BreakoutScanner(provider, provider, get_profile("1d"))
        >>> report = scanner.scan(["SYN_BREAKOUT", "SYN_BEAR"])
        >>> report.scanned
        2
    """

    def __init__(
        self,
        candle_source: CandleSource,
        ticker_source: TickerSource,
        profile: TimeframeProfile,
        max_results: int = 30,
        batch_size: Optional[int] = None,
    ) -> None:
        """Initialize scanner.

        Args:
            candle_source: Provides candle history.
            ticker_source: Provides last price and 24h volume.
            profile: Timeframe profile for every symbol in the scan.
            max_results: Keep at most this many ranked results.
            batch_size: Symbols per progress batch (default 5 on hourly
                candles, otherwise 10).
        """
        if max_results < 1:
            raise ValueError(f"max_results must be >= 1, got {max_results}")

        self.candle_source = candle_source
        self.ticker_source = ticker_source
        self.profile = profile
        self.max_results = max_results
        self.batch_size = batch_size or (5 if profile.timeframe == "1h" else 10)

    def analyze_symbol(self, symbol: str) -> Optional[ClassificationResult]:
        """Fetch data for one symbol and analyze it.

        Raises:
            DataUnavailableError: If either source has no data.
        """
        candles = self.candle_source.fetch_candles(symbol, self.profile)
        ticker = self.ticker_source.fetch_ticker(symbol, self.profile)

        return analyze(
            symbol=symbol,
            candles=candles,
            last_price=ticker.last_price,
            volume_24h=ticker.volume_24h,
            profile=self.profile,
        )

    def scan(self, symbols: Iterable[str]) -> ScanReport:
        """Scan symbols and return ranked, truncated results.

        Args:
            symbols: Symbols to analyze.

        Returns:
            ScanReport with ranked results and counters.
        """
        symbols = list(symbols)
        report = ScanReport(timeframe=self.profile.timeframe)
        collected: List[ClassificationResult] = []

        logger.info(
            f"Scanning {len(symbols)} symbols on {self.profile.timeframe} "
            f"(batch size {self.batch_size})"
        )

        for start in range(0, len(symbols), self.batch_size):
            batch = symbols[start : start + self.batch_size]

            for symbol in batch:
                report.scanned += 1
                log = logger.bind(symbol=symbol)

                try:
                    result = self.analyze_symbol(symbol)
                except DataUnavailableError as e:
                    log.warning(f"Data unavailable: {e}")
                    report.failed += 1
                    report.failures[symbol] = str(e)
                    continue
                except Exception as e:
                    log.warning(f"Analysis failed: {e}")
                    report.failed += 1
                    report.failures[symbol] = str(e)
                    continue

                if result is None:
                    report.rejected += 1
                else:
                    log.debug(f"Admitted as {result.status.value} ({result.breakout_potential})")
                    report.admitted += 1
                    collected.append(result)

            logger.info(
                f"Scanned {min(start + self.batch_size, len(symbols))} of {len(symbols)} "
                f"- {report.admitted} candidates"
            )

        report.results = rank_results(collected)[: self.max_results]

        logger.info(
            f"Scan complete: {report.admitted} admitted, {report.rejected} rejected, "
            f"{report.failed} failed; keeping {len(report.results)}"
        )

        return report
