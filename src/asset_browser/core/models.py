"""Core data models and enums for the Game Asset Browser."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .classifier import Category, classify, normalize_extension, split_extension

ALL_CATEGORIES = "All"

KB = 1024
MB = 1024 * 1024
GB = 1024 * 1024 * 1024


def format_file_size(size_bytes: int) -> str:
    """Format a single file size in human-readable form."""
    if size_bytes < KB:
        return f"{size_bytes} B"
    elif size_bytes < MB:
        return f"{size_bytes / KB:.1f} KB"
    elif size_bytes < GB:
        return f"{size_bytes / MB:.1f} MB"
    else:
        return f"{size_bytes / GB:.2f} GB"


def format_total_size(size_bytes: int) -> str:
    """Format an aggregate size; totals never drop below kilobytes."""
    if size_bytes < MB:
        return f"{size_bytes / KB:.1f} KB"
    elif size_bytes < GB:
        return f"{size_bytes / MB:.1f} MB"
    else:
        return f"{size_bytes / GB:.2f} GB"


@dataclass(frozen=True)
class Asset:
    """One catalogued file and the metadata derived from it."""
    name: str
    full_path: str
    extension: str
    size_bytes: int
    date_modified: datetime
    relative_path: str
    tags: Tuple[str, ...] = ()
    category: Category = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "extension", normalize_extension(self.extension))
        object.__setattr__(self, "tags", tuple(self.tags))
        object.__setattr__(self, "category", classify(self.extension))

    @classmethod
    def create(cls, file_path: Path, root: Path) -> "Asset":
        """Create an Asset from a file below the scan root."""
        stat = file_path.stat()
        relative = file_path.relative_to(root)
        name, extension = split_extension(file_path.name)
        return cls(
            name=name,
            full_path=str(file_path.absolute()),
            extension=extension,
            size_bytes=stat.st_size,
            date_modified=datetime.fromtimestamp(stat.st_mtime),
            relative_path=str(relative),
            tags=tags_from_relative_path(relative),
        )

    @property
    def file_name(self) -> str:
        return f"{self.name}{self.extension}"

    @property
    def icon(self) -> str:
        return self.category.icon

    @property
    def size_display(self) -> str:
        return format_file_size(self.size_bytes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "name": self.name,
            "file_name": self.file_name,
            "full_path": self.full_path,
            "extension": self.extension,
            "category": self.category.value,
            "icon": self.icon,
            "size_bytes": self.size_bytes,
            "size_display": self.size_display,
            "date_modified": self.date_modified.isoformat(),
            "relative_path": self.relative_path,
            "tags": list(self.tags),
        }


def tags_from_relative_path(relative_path: Union[str, Path]) -> Tuple[str, ...]:
    """Derive tags from the directory segments of a root-relative path."""
    parent = Path(relative_path).parent
    return tuple(part for part in parent.parts if part.strip() and part != ".")


Catalog = Tuple[Asset, ...]


@dataclass(frozen=True)
class Summary:
    """Aggregate statistics over a catalog."""
    total_assets: int
    total_size_bytes: int
    category_counts: Mapping[Category, int]
    unique_extensions: int

    @classmethod
    def empty(cls) -> "Summary":
        return cls(0, 0, MappingProxyType({category: 0 for category in Category}), 0)

    def count_for(self, category: Category) -> int:
        return self.category_counts.get(category, 0)

    @property
    def image_count(self) -> int:
        return self.count_for(Category.IMAGE)

    @property
    def audio_count(self) -> int:
        return self.count_for(Category.AUDIO)

    @property
    def model_count(self) -> int:
        return self.count_for(Category.MODEL)

    @property
    def config_count(self) -> int:
        return self.count_for(Category.CONFIG)

    @property
    def other_count(self) -> int:
        return self.count_for(Category.OTHER)

    @property
    def total_size_display(self) -> str:
        return format_total_size(self.total_size_bytes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "total_assets": self.total_assets,
            "total_size_bytes": self.total_size_bytes,
            "total_size_display": self.total_size_display,
            "category_counts": {c.value: self.count_for(c) for c in Category},
            "unique_extensions": self.unique_extensions,
        }


class SortKey(Enum):
    """Sort orders offered for the asset view. Values are the display labels."""
    NAME_ASC = "Name (A-Z)"
    NAME_DESC = "Name (Z-A)"
    SIZE_ASC = "Size (Smallest)"
    SIZE_DESC = "Size (Largest)"
    DATE_DESC = "Date (Newest)"
    DATE_ASC = "Date (Oldest)"
    CATEGORY = "Category"

    @classmethod
    def lookup(cls, value: Union["SortKey", str, None]) -> Optional["SortKey"]:
        """Resolve a sort key from a member, label or member name; None if nothing matches."""
        if isinstance(value, cls):
            return value
        if not value:
            return None
        wanted = str(value).strip().lower()
        for key in cls:
            if key.value.lower() == wanted or key.name.lower() == wanted:
                return key
        return None

    @classmethod
    def parse(cls, value: Union["SortKey", str, None]) -> "SortKey":
        """Like lookup, but unknown or unset values fall back to NAME_ASC."""
        return cls.lookup(value) or cls.NAME_ASC

    @classmethod
    def labels(cls) -> List[str]:
        return [key.value for key in cls]


@dataclass(frozen=True)
class FilterState:
    """Current category/tag/search/sort selection driving the view."""
    category: str = ALL_CATEGORIES
    tag: Optional[str] = None
    search_text: str = ""
    sort_key: SortKey = SortKey.NAME_ASC

    @classmethod
    def defaults(cls) -> "FilterState":
        return cls()

    def with_changes(self, **changes) -> "FilterState":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "tag": self.tag,
            "search_text": self.search_text,
            "sort_key": SortKey.parse(self.sort_key).value,
        }


@dataclass
class ScanOptions:
    """Options for directory scanning operations."""
    recursive: bool = True
    include_hidden: bool = True
    max_depth: Optional[int] = None
    follow_symlinks: bool = False
    verbose: bool = False


@dataclass(frozen=True)
class SkippedEntry:
    """A file left out of the catalog because it could not be read."""
    path: str
    reason: str
    error_type: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "reason": self.reason, "error_type": self.error_type}


@dataclass
class ScanResult:
    """Result of a directory scan operation."""
    root: str
    assets: Catalog = ()
    skipped: List[SkippedEntry] = field(default_factory=list)
    total_files: int = 0
    duration: float = 0.0
    aborted: bool = False

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def asset_count(self) -> int:
        return len(self.assets)
