"""Session state: owns the catalog, the filter selection and the derived view."""

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from .classifier import Category
from .exceptions import ScanInProgressError, ValidationError
from .models import ALL_CATEGORIES, Catalog, FilterState, ScanOptions, ScanResult, SortKey, Summary
from .query import available_categories, available_tags, derive
from .scanner import AssetScanner
from .summary import summarize

INITIAL_STATUS = "Select a folder to browse game assets"

CATALOG_CHANGED = "catalog"
VIEW_CHANGED = "view"

Listener = Callable[["AssetSession", str], None]


def _text_filter(field: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string, got {type(value).__name__}")
    return value


def _category_filter(value: Any) -> str:
    if isinstance(value, Category):
        return value.value
    return _text_filter("category", value) or ALL_CATEGORIES


def _tag_filter(value: Any) -> Optional[str]:
    return _text_filter("tag", value) or None


def _search_filter(value: Any) -> str:
    return _text_filter("search_text", value)


# Filter field -> normalizer applied before a change is accepted.
FILTER_FIELDS: Dict[str, Callable[[Any], Any]] = {
    "category": _category_filter,
    "tag": _tag_filter,
    "search_text": _search_filter,
    "sort_key": SortKey.parse,
}


class AssetSession:
    """
    Single owner of the browsing state.

    A scan replaces the catalog wholesale, recomputes the summary and the
    available categories/tags, and resets the filters. Every filter mutation
    recomputes only the view. Presentation layers read snapshots through the
    properties and may subscribe to change notifications.
    """

    def __init__(self, scanner: Optional[AssetScanner] = None):
        self.scanner = scanner or AssetScanner()
        self.logger = logging.getLogger(__name__)

        self._lock = threading.RLock()
        self._scan_lock = threading.Lock()
        self._listeners: List[Listener] = []

        self._root_path: Optional[str] = None
        self._last_scan: Optional[ScanResult] = None
        self._catalog: Catalog = ()
        self._summary = Summary.empty()
        self._categories: List[str] = [ALL_CATEGORIES]
        self._tags: List[str] = []
        self._filters = FilterState.defaults()
        self._view: Catalog = ()
        self._status = INITIAL_STATUS

    # Read-only snapshots

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def summary(self) -> Summary:
        return self._summary

    @property
    def view(self) -> Catalog:
        return self._view

    @property
    def filter_state(self) -> FilterState:
        return self._filters

    @property
    def available_categories(self) -> List[str]:
        return list(self._categories)

    @property
    def available_tags(self) -> List[str]:
        return list(self._tags)

    @property
    def sort_options(self) -> List[str]:
        return SortKey.labels()

    @property
    def status(self) -> str:
        return self._status

    @property
    def root_path(self) -> Optional[str]:
        return self._root_path

    @property
    def last_scan(self) -> Optional[ScanResult]:
        return self._last_scan

    @property
    def is_scanning(self) -> bool:
        return self._scan_lock.locked()

    # Notifications

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener called with (session, event).

        Returns:
            Callable that removes the listener again
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str):
        for listener in list(self._listeners):
            try:
                listener(self, event)
            except Exception as e:
                self.logger.warning(f"Session listener {listener!r} failed on '{event}': {e}")

    # Scanning

    def load(self, root: Union[str, Path], options: Optional[ScanOptions] = None) -> ScanResult:
        """
        Scan root and replace the catalog with the result.

        Raises:
            ScanInProgressError: If another scan is still running
        """
        if not self._scan_lock.acquire(blocking=False):
            raise ScanInProgressError("A scan is already in progress")

        previous_status = self._status
        try:
            self._status = "Scanning folder..."
            try:
                result = self.scanner.scan_directory(root, options)
            except Exception:
                self._status = previous_status
                raise

            with self._lock:
                self._root_path = str(root)
                self._last_scan = result
                self._catalog = result.assets
                self._summary = summarize(self._catalog)
                self._categories = available_categories(self._catalog)
                self._tags = available_tags(self._catalog)
                self._filters = FilterState.defaults()
                self._view = derive(self._catalog, self._filters)
                self._status = f"Loaded {len(self._catalog)} assets from {root}"
        finally:
            self._scan_lock.release()

        self.logger.info(self._status)
        self._notify(CATALOG_CHANGED)
        return result

    # Filter mutations

    def _update_filters(self, **changes) -> Catalog:
        with self._lock:
            updated = self._filters.with_changes(**changes)
            if updated == self._filters:
                return self._view
            # Filters and view are swapped together once the new view exists.
            new_view = derive(self._catalog, updated)
            self._filters = updated
            self._view = new_view
            self._status = f"Showing {len(self._view)} of {len(self._catalog)} assets"
            view = self._view

        self._notify(VIEW_CHANGED)
        return view

    def update_filters(self, **changes) -> Catalog:
        """
        Apply several filter changes with one recompute and one notification.

        Every value is checked before anything is applied, so a rejected call
        leaves the filters untouched.

        Raises:
            ValidationError: On an unknown field or a value of the wrong type
        """
        unknown = [key for key in changes if key not in FILTER_FIELDS]
        if unknown:
            raise ValidationError(f"Unknown filter fields: {', '.join(unknown)}")

        normalized = {key: FILTER_FIELDS[key](value) for key, value in changes.items()}
        return self._update_filters(**normalized)

    def set_category(self, category: Union[Category, str, None]) -> Catalog:
        return self.update_filters(category=category)

    def set_tag(self, tag: Optional[str]) -> Catalog:
        return self.update_filters(tag=tag)

    def set_search_text(self, search_text: Optional[str]) -> Catalog:
        return self.update_filters(search_text=search_text)

    def set_sort_key(self, sort_key: Union[SortKey, str, None]) -> Catalog:
        return self.update_filters(sort_key=sort_key)

    def clear_search(self) -> Catalog:
        return self._update_filters(search_text="")

    def clear_filters(self) -> Catalog:
        defaults = FilterState.defaults()
        return self._update_filters(
            category=defaults.category,
            tag=defaults.tag,
            search_text=defaults.search_text,
            sort_key=defaults.sort_key,
        )

    def snapshot(self) -> Dict[str, Any]:
        """Everything a presentation layer renders, as plain data."""
        with self._lock:
            return {
                "root_path": self._root_path,
                "status": self._status,
                "summary": self._summary.to_dict(),
                "filters": self._filters.to_dict(),
                "available_categories": list(self._categories),
                "available_tags": list(self._tags),
                "sort_options": SortKey.labels(),
                "view": [asset.to_dict() for asset in self._view],
                "total": len(self._catalog),
            }
