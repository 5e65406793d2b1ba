"""Aggregate statistics over an asset catalog."""

from types import MappingProxyType
from typing import Iterable

from .classifier import Category
from .models import Asset, Summary


def summarize(catalog: Iterable[Asset]) -> Summary:
    """
    Reduce a catalog to its summary in a single pass.

    Args:
        catalog: Assets produced by one scan

    Returns:
        Summary with totals, zero-filled per-category counts and the
        number of distinct extensions
    """
    total_assets = 0
    total_size = 0
    counts = {category: 0 for category in Category}
    extensions = set()

    for asset in catalog:
        total_assets += 1
        total_size += asset.size_bytes
        counts[asset.category] += 1
        extensions.add(asset.extension)

    return Summary(
        total_assets=total_assets,
        total_size_bytes=total_size,
        category_counts=MappingProxyType(counts),
        unique_extensions=len(extensions),
    )
