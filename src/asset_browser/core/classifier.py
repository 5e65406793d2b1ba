"""Extension based classification of game assets."""

from enum import Enum
from typing import Dict, Tuple


class Category(Enum):
    """Asset categories supported by the browser."""
    IMAGE = "Image"
    AUDIO = "Audio"
    MODEL = "Model"
    CONFIG = "Config"
    SCRIPT = "Script"
    DOCUMENT = "Document"
    OTHER = "Other"

    @property
    def icon(self) -> str:
        """Glyph shown next to assets of this category."""
        return CATEGORY_ICONS.get(self, DEFAULT_ICON)

    @classmethod
    def from_label(cls, label: str) -> "Category":
        """
        Look up a category by its label or member name, ignoring case.

        Raises:
            ValueError: If the label names no category
        """
        wanted = label.strip().lower()
        for category in cls:
            if category.value.lower() == wanted or category.name.lower() == wanted:
                return category
        raise ValueError(f"Unknown category: {label}")


CATEGORY_ICONS: Dict[Category, str] = {
    Category.IMAGE: "🖼️",
    Category.AUDIO: "🔊",
    Category.MODEL: "🧊",
    Category.CONFIG: "⚙️",
}

DEFAULT_ICON = "📄"

# Scripts and documents are catalogued by the scanner but have no entry here,
# so they land in Category.OTHER.
EXTENSION_CATEGORIES: Dict[str, Category] = {
    # Images and textures
    ".png": Category.IMAGE,
    ".jpg": Category.IMAGE,
    ".jpeg": Category.IMAGE,
    ".bmp": Category.IMAGE,
    ".gif": Category.IMAGE,
    ".tga": Category.IMAGE,
    ".tiff": Category.IMAGE,
    ".dds": Category.IMAGE,
    ".svg": Category.IMAGE,

    # Audio
    ".wav": Category.AUDIO,
    ".mp3": Category.AUDIO,
    ".ogg": Category.AUDIO,
    ".flac": Category.AUDIO,
    ".aiff": Category.AUDIO,

    # 3D models
    ".fbx": Category.MODEL,
    ".obj": Category.MODEL,
    ".blend": Category.MODEL,
    ".max": Category.MODEL,
    ".dae": Category.MODEL,
    ".gltf": Category.MODEL,
    ".glb": Category.MODEL,
    ".stl": Category.MODEL,

    # Config and data
    ".json": Category.CONFIG,
    ".xml": Category.CONFIG,
    ".yaml": Category.CONFIG,
    ".yml": Category.CONFIG,
    ".ini": Category.CONFIG,
    ".cfg": Category.CONFIG,
    ".toml": Category.CONFIG,
    ".csv": Category.CONFIG,
}


def split_extension(file_name: str) -> Tuple[str, str]:
    """
    Split a file name into (name, extension) at the last dot.

    A leading dot counts, so ".png" has the extension ".png" and an empty
    name. A trailing dot leaves no extension.
    """
    index = file_name.rfind(".")
    if index < 0 or index == len(file_name) - 1:
        return file_name, ""
    return file_name[:index], file_name[index:]


def normalize_extension(extension: str) -> str:
    """Return the extension lower-cased with a single leading dot ('' if empty)."""
    extension = (extension or "").strip().lower()
    if not extension:
        return ""
    return extension if extension.startswith(".") else f".{extension}"


def classify(extension: str) -> Category:
    """
    Map a file extension to its category.

    Args:
        extension: Extension with or without the leading dot, any case

    Returns:
        The matching Category, Category.OTHER when the extension is unknown
    """
    return EXTENSION_CATEGORIES.get(normalize_extension(extension), Category.OTHER)


def icon_for(extension: str) -> str:
    """Return the icon glyph for a file extension."""
    return classify(extension).icon
