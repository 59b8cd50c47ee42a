"""Command-line interface for running breakout scans."""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from .config import ScannerConfig, load_config
from .data import CsvMarketData, SyntheticProvider
from .scan import BreakoutScanner, ScanReport
from .utils import setup_logger


def format_volume(volume: float) -> str:
    """Abbreviate a volume figure (K/M/B)."""
    if volume >= 1e9:
        return f"{volume / 1e9:.2f}B"
    if volume >= 1e6:
        return f"{volume / 1e6:.2f}M"
    if volume >= 1e3:
        return f"{volume / 1e3:.2f}K"
    return f"{volume:.0f}"


def print_report(report: ScanReport) -> None:
    """Print a ranked summary table."""
    print("\n" + "=" * 78)
    print(f"CLOUD BREAKOUT SCAN ({report.timeframe})")
    print("=" * 78)
    print(f"Scanned:   {report.scanned}")
    print(f"Admitted:  {report.admitted}")
    print(f"Rejected:  {report.rejected}")
    print(f"Failed:    {report.failed}")
    print("-" * 78)

    if not report.results:
        print("No symbols meet the breakout criteria")
    else:
        print(f"{'#':>3}  {'Symbol':<12}{'Status':<17}{'Score':>6}{'Dist%':>8}"
              f"{'Price':>12}{'Cloud top':>12}{'Vol 24h':>9}")
        for rank, r in enumerate(report.results, start=1):
            print(
                f"{rank:>3}  {r.symbol:<12}{r.status.value:<17}{r.breakout_potential:>6}"
                f"{r.distance_to_cloud_pct:>8.2f}{r.price:>12.4f}{r.cloud.cloud_top:>12.4f}"
                f"{format_volume(r.volume_24h):>9}"
            )

    print("=" * 78)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Ichimoku cloud breakout scanner"
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to scanner configuration YAML file",
    )

    parser.add_argument(
        "--data-dir",
        "-d",
        type=Path,
        default=None,
        help="Override candle CSV directory (default from config)",
    )

    parser.add_argument(
        "--timeframe",
        "-t",
        choices=["1d", "4h", "1h"],
        default=None,
        help="Override timeframe (default from config)",
    )

    parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Keep at most N results (default from config)",
    )

    parser.add_argument(
        "--symbols",
        nargs="+",
        default=None,
        help="Symbols to scan (default: every CSV file for the timeframe)",
    )

    parser.add_argument(
        "--synthetic",
        action="store_true",
        help="Scan generated data instead of CSV files",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for --synthetic",
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    args = build_parser().parse_args(argv)

    if args.config is not None and not args.config.exists():
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return 1

    try:
        config = load_config(args.config) if args.config else ScannerConfig()

        overrides = {}
        if args.data_dir is not None:
            overrides["data_dir"] = args.data_dir
        if args.timeframe is not None:
            overrides["timeframe"] = args.timeframe
        if args.top is not None:
            overrides["max_results"] = args.top
        if args.symbols is not None:
            overrides["symbols"] = args.symbols
        if overrides:
            config = ScannerConfig(**{**config.model_dump(), **overrides})

        setup_logger(
            log_level=config.log_level,
            log_to_file=config.log_to_file,
            log_dir=Path("logs"),
        )

        profile = config.profile()
        logger.info(f"Scan: {config.name} v{config.version} on {profile.timeframe}")

        if args.synthetic:
            source = SyntheticProvider(seed=args.seed)
            symbols = config.symbols or ["SYN_BREAKOUT", "SYN_BULL", "SYN_BEAR", "SYN_LOW"]
        else:
            source = CsvMarketData(config.data_dir)
            symbols = config.symbols or source.available_symbols(profile.timeframe)

        if not symbols:
            logger.warning(f"No symbols to scan in {config.data_dir}")

        scanner = BreakoutScanner(
            candle_source=source,
            ticker_source=source,
            profile=profile,
            max_results=config.max_results,
            batch_size=config.resolved_batch_size(),
        )
        report = scanner.scan(symbols)

        print_report(report)

        return 0

    except Exception as e:
        logger.error(f"Scan failed: {e}")
        print(f"\nError: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
