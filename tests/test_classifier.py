"""Tests for extension classification."""

import pytest

from asset_browser.core.classifier import (
    Category, EXTENSION_CATEGORIES, classify, icon_for, normalize_extension, split_extension
)


class TestClassify:
    """Test the extension to category table."""

    @pytest.mark.parametrize("extension, expected", [
        (".png", Category.IMAGE),
        (".dds", Category.IMAGE),
        (".svg", Category.IMAGE),
        (".wav", Category.AUDIO),
        (".aiff", Category.AUDIO),
        (".fbx", Category.MODEL),
        (".glb", Category.MODEL),
        (".json", Category.CONFIG),
        (".csv", Category.CONFIG),
    ])
    def test_known_extensions(self, extension, expected):
        assert classify(extension) is expected

    def test_case_insensitive(self):
        """Every table entry classifies the same in any case."""
        for extension in EXTENSION_CATEGORIES:
            assert classify(extension) == classify(extension.upper()) == classify(extension.lower())

    def test_leading_dot_is_optional(self):
        assert classify("png") is Category.IMAGE
        assert classify("MP3") is Category.AUDIO
        assert classify(" .Yml ") is Category.CONFIG

    def test_unknown_extensions_fall_to_other(self):
        for extension in (".exe", ".zip", "", ".tar.gz", "weird"):
            assert classify(extension) is Category.OTHER

    def test_scripts_and_documents_are_not_auto_detected(self):
        """Scripts and documents have categories but the table never yields them."""
        for extension in (".cs", ".lua", ".py", ".shader", ".hlsl", ".glsl", ".txt", ".md", ".pdf"):
            assert classify(extension) is Category.OTHER

        assert Category.SCRIPT not in EXTENSION_CATEGORIES.values()
        assert Category.DOCUMENT not in EXTENSION_CATEGORIES.values()


class TestIcons:
    """Test the glyphs attached to categories."""

    def test_category_icons(self):
        assert icon_for(".png") == "🖼️"
        assert icon_for(".ogg") == "🔊"
        assert icon_for(".obj") == "🧊"
        assert icon_for(".ini") == "⚙️"

    def test_default_icon(self):
        assert icon_for(".lua") == "📄"
        assert Category.SCRIPT.icon == "📄"


class TestHelpers:
    """Test small helpers around categories."""

    def test_normalize_extension(self):
        assert normalize_extension("PNG") == ".png"
        assert normalize_extension(".Png") == ".png"
        assert normalize_extension("") == ""
        assert normalize_extension(None) == ""

    def test_category_from_label(self):
        assert Category.from_label("audio") is Category.AUDIO
        assert Category.from_label("Model") is Category.MODEL
        assert Category.from_label("CONFIG") is Category.CONFIG

    def test_category_from_unknown_label(self):
        with pytest.raises(ValueError):
            Category.from_label("Texture")

    def test_split_extension(self):
        assert split_extension("hero.png") == ("hero", ".png")
        assert split_extension("hero.backup.PNG") == ("hero.backup", ".PNG")
        assert split_extension(".png") == ("", ".png")
        assert split_extension("Makefile") == ("Makefile", "")
        assert split_extension("notes.") == ("notes.", "")
