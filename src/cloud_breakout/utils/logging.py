"""Logging configuration using loguru.

Console output is colourised; an optional rotating file sink keeps scan
history on disk. Records carry a ``symbol`` extra so per-symbol messages
from a scan can be filtered.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[symbol]: <10}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[symbol]: <10} | "
    "{name}:{function}:{line} - {message}"
)


def setup_logger(
    log_level: str = "INFO",
    log_to_file: bool = False,
    log_dir: Path = Path("logs"),
    scan_id: Optional[str] = None,
    serialize: bool = False,
) -> None:
    """Configure loguru logger with console and optional file output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_to_file: Whether to write logs to file.
        log_dir: Directory for log files.
        scan_id: Optional scan identifier for the log filename.
        serialize: Whether to use JSON serialization for file logs.
    """
    logger.remove()
    logger.configure(extra={"symbol": "-"})

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=log_level,
        colorize=True,
    )

    if log_to_file:
        log_dir.mkdir(parents=True, exist_ok=True)

        filename = "cloud_breakout" if scan_id is None else f"cloud_breakout_{scan_id}"

        logger.add(
            log_dir / f"{filename}.log",
            format=FILE_FORMAT,
            level=log_level,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
            serialize=serialize,
        )
