"""Local CSV market data for offline scans."""

from pathlib import Path
from typing import Dict, Optional

import pandas as pd
from loguru import logger

from ..config import TimeframeProfile
from .base import CANDLE_COLUMNS, CandleSource, DataUnavailableError, Ticker, TickerSource


class CsvMarketData(CandleSource, TickerSource):
    """Reads candles and tickers from a directory of CSV files.

    Layout:
        ``<data_dir>/<SYMBOL>_<timeframe>.csv`` with columns high, low, close,
        volume and an optional ``timestamp`` column.
        ``<data_dir>/tickers.csv`` (optional) with columns symbol,
        last_price, volume_24h.

    When no ticker row exists for a symbol the ticker is derived from its
    candle file on the scanned timeframe: last close and the volume of the
    trailing 24 hours. Files with missing or non-numeric candle values are
    rejected whole.
    """

    TICKER_FILE = "tickers.csv"

    def __init__(self, data_dir: Path | str) -> None:
        """Initialize CSV market data.

        Args:
            data_dir: Directory holding the CSV files.
        """
        self.data_dir = Path(data_dir)
        self._tickers: Optional[Dict[str, Ticker]] = None

    def _candle_path(self, symbol: str, timeframe: str) -> Path:
        """Get file path for symbol and timeframe."""
        return self.data_dir / f"{symbol.upper()}_{timeframe}.csv"

    def available_symbols(self, timeframe: str) -> list[str]:
        """List symbols with a candle file for the timeframe."""
        if not self.data_dir.exists():
            return []

        suffix = f"_{timeframe}.csv"
        return sorted(
            p.name[: -len(suffix)]
            for p in self.data_dir.glob(f"*{suffix}")
            if p.is_file()
        )

    def fetch_candles(self, symbol: str, profile: TimeframeProfile) -> pd.DataFrame:
        """Load candles for a symbol.

        Raises:
            DataUnavailableError: If the file is missing or unreadable, lacks
                the required columns, or holds blank or non-numeric values.
        """
        path = self._candle_path(symbol, profile.timeframe)

        if not path.exists():
            raise DataUnavailableError(f"No {profile.timeframe} candles for {symbol}: {path}")

        try:
            df = pd.read_csv(path)
        except (OSError, ValueError) as e:
            raise DataUnavailableError(f"Failed to read {path}: {e}") from e

        missing = [c for c in CANDLE_COLUMNS if c not in df.columns]
        if missing:
            raise DataUnavailableError(f"{path} missing columns: {missing}")

        try:
            if "timestamp" in df.columns:
                df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
                df = df.set_index("timestamp").sort_index()

            df = df[CANDLE_COLUMNS].astype(float)
        except (TypeError, ValueError) as e:
            raise DataUnavailableError(f"{path} has malformed values: {e}") from e

        incomplete = int(df.isna().any(axis=1).sum())
        if incomplete:
            raise DataUnavailableError(f"{path} has {incomplete} incomplete candle rows")

        logger.debug(f"Loaded {len(df)} candles for {symbol} from {path}")

        return df

    def fetch_ticker(self, symbol: str, profile: TimeframeProfile) -> Ticker:
        """Load or derive the ticker for a symbol.

        Args:
            symbol: Trading symbol.
            profile: Timeframe whose candles derive the ticker when no
                ticker row exists.

        Raises:
            DataUnavailableError: If neither a ticker row nor candles exist.
        """
        tickers = self._load_tickers()
        if symbol.upper() in tickers:
            return tickers[symbol.upper()]

        df = self.fetch_candles(symbol, profile)
        if df.empty:
            raise DataUnavailableError(f"No candles to derive ticker for {symbol}")

        window = df.iloc[-profile.candles_per_day :]

        return Ticker(
            symbol=symbol.upper(),
            last_price=float(df["close"].iloc[-1]),
            volume_24h=float(window["volume"].sum()),
        )

    def _load_tickers(self) -> Dict[str, Ticker]:
        """Read the optional ticker file once."""
        if self._tickers is not None:
            return self._tickers

        self._tickers = {}
        path = self.data_dir / self.TICKER_FILE

        if not path.exists():
            return self._tickers

        try:
            df = pd.read_csv(path)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read ticker file {path}: {e}")
            return self._tickers

        for row in df.itertuples(index=False):
            symbol = str(row.symbol).upper()
            self._tickers[symbol] = Ticker(
                symbol=symbol,
                last_price=float(row.last_price),
                volume_24h=float(row.volume_24h),
            )

        logger.debug(f"Loaded {len(self._tickers)} tickers from {path}")

        return self._tickers
