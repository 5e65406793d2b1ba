"""Core engine: scanning, classification, summaries and the filtered view."""

from .classifier import Category, classify
from .models import Asset, FilterState, ScanOptions, ScanResult, SkippedEntry, SortKey, Summary
from .query import derive
from .scanner import AssetScanner, scan
from .session import AssetSession
from .summary import summarize

__all__ = [
    "Asset",
    "AssetScanner",
    "AssetSession",
    "Category",
    "FilterState",
    "ScanOptions",
    "ScanResult",
    "SkippedEntry",
    "SortKey",
    "Summary",
    "classify",
    "derive",
    "scan",
    "summarize",
]
