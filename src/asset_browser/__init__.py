"""Game Asset Browser - catalog, classify and filter game asset folders."""

__version__ = "0.1.0"
__author__ = "Game Asset Browser Team"
__description__ = "Catalog, classify and filter game asset folders"

from .core import (
    Asset,
    AssetScanner,
    AssetSession,
    Category,
    FilterState,
    SortKey,
    Summary,
    classify,
    derive,
    scan,
    summarize,
)

__all__ = [
    "Asset",
    "AssetScanner",
    "AssetSession",
    "Category",
    "FilterState",
    "SortKey",
    "Summary",
    "classify",
    "derive",
    "scan",
    "summarize",
]
