"""Filtering and sorting of a catalog into the presented view."""

from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .classifier import Category
from .models import ALL_CATEGORIES, Asset, FilterState, SortKey

View = Tuple[Asset, ...]


def matches_category(asset: Asset, category: Union[Category, str, None]) -> bool:
    if isinstance(category, Category):
        return asset.category is category
    if not category or category == ALL_CATEGORIES:
        return True
    return asset.category.value == category


def matches_tag(asset: Asset, tag: Optional[str]) -> bool:
    if not tag:
        return True
    return tag in asset.tags


def matches_text(asset: Asset, search_text: Optional[str]) -> bool:
    """Case-insensitive substring match on name, relative path, extension or any tag."""
    if not search_text or not search_text.strip():
        return True
    needle = search_text.casefold()
    fields = (asset.name, asset.relative_path, asset.extension) + tuple(asset.tags)
    return any(needle in value.casefold() for value in fields)


def _name_key(asset: Asset):
    # Case-insensitive first, exact spelling only separates otherwise equal names.
    return (asset.name.casefold(), asset.name)


def _tie_break(asset: Asset):
    return _name_key(asset) + (asset.relative_path, asset.full_path)


# (primary key, descending) per sort order; ties always fall back to name ascending.
_SORT_SPECS = {
    SortKey.NAME_ASC: (_name_key, False),
    SortKey.NAME_DESC: (_name_key, True),
    SortKey.SIZE_ASC: (lambda a: a.size_bytes, False),
    SortKey.SIZE_DESC: (lambda a: a.size_bytes, True),
    SortKey.DATE_ASC: (lambda a: a.date_modified, False),
    SortKey.DATE_DESC: (lambda a: a.date_modified, True),
    SortKey.CATEGORY: (lambda a: a.category.value, False),
}


def sort_assets(assets: Iterable[Asset], sort_key: Union[SortKey, str, None]) -> List[Asset]:
    """
    Sort assets by the selected key with a deterministic tie-break.

    Python's sort is stable, also with ``reverse=True``, so ordering by the
    tie-break first and then by the primary key leaves equal primary keys in
    name-ascending order.
    """
    primary, descending = _SORT_SPECS[SortKey.parse(sort_key)]
    ordered = sorted(assets, key=_tie_break)
    ordered.sort(key=primary, reverse=descending)
    return ordered


def derive(catalog: Sequence[Asset], filter_state: FilterState) -> View:
    """
    Apply the category, tag and text filters conjunctively, then sort.

    Args:
        catalog: Current catalog
        filter_state: Active selection

    Returns:
        Ordered view of the matching assets
    """
    filtered = [
        asset for asset in catalog
        if matches_category(asset, filter_state.category)
        and matches_tag(asset, filter_state.tag)
        and matches_text(asset, filter_state.search_text)
    ]
    return tuple(sort_assets(filtered, filter_state.sort_key))


def available_categories(catalog: Iterable[Asset]) -> List[str]:
    """'All' followed by the sorted distinct category labels present."""
    return [ALL_CATEGORIES] + sorted({asset.category.value for asset in catalog})


def available_tags(catalog: Iterable[Asset]) -> List[str]:
    """Sorted distinct tags across all assets."""
    return sorted({tag for asset in catalog for tag in asset.tags})
