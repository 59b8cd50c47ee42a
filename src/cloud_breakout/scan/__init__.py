"""Batch scanning of symbol lists."""

from .scanner import BreakoutScanner, ScanReport

__all__ = ["BreakoutScanner", "ScanReport"]
