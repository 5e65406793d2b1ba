"""Tests for the directory scanner."""

import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

from asset_browser.core.classifier import Category
from asset_browser.core.models import Asset, ScanOptions
from asset_browser.core.scanner import AssetScanner, SUPPORTED_EXTENSIONS, scan

from conftest import make_file


class TestAllowlist:
    """Test which files the scanner picks up."""

    def test_is_supported(self):
        assert AssetScanner.is_supported("hero.PNG")
        assert AssetScanner.is_supported(Path("a/b/script.lua"))
        assert AssetScanner.is_supported(".md")
        assert not AssetScanner.is_supported("setup.exe")
        assert not AssetScanner.is_supported("Makefile")

    def test_extension_starts_at_last_dot(self):
        assert AssetScanner.is_supported(".png")
        assert AssetScanner.is_supported("textures/.PNG")
        assert AssetScanner.is_supported("hero.backup.png")
        assert not AssetScanner.is_supported("png")
        assert not AssetScanner.is_supported("hero.png.")

    def test_scripts_are_allowed_but_classified_other(self):
        assert ".cs" in SUPPORTED_EXTENSIONS
        assert ".pdf" in SUPPORTED_EXTENSIONS
        assert ".exe" not in SUPPORTED_EXTENSIONS


class TestScanDirectory:
    """Test scanning real directory trees."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.scanner = AssetScanner()

    def teardown_method(self):
        """Clean up test environment."""
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_example_tree(self, asset_tree):
        result = self.scanner.scan_directory(asset_tree)

        assert not result.aborted
        assert result.total_files == 3
        assert result.skipped == []
        assert sorted(a.file_name for a in result.assets) == ["hero.png", "theme.mp3"]

        hero = next(a for a in result.assets if a.name == "hero")
        assert hero.category is Category.IMAGE
        assert hero.extension == ".png"
        assert hero.size_bytes == 10 * 1024
        assert hero.relative_path == str(Path("textures") / "hero.png")
        assert hero.tags == ("textures",)
        assert hero.date_modified == datetime(2024, 1, 1, 12, 0)
        assert Path(hero.full_path).is_absolute()

    def test_nested_tags(self):
        make_file(self.temp_dir, "characters/hero/idle.fbx", size=5)

        assets = scan(self.temp_dir)

        assert len(assets) == 1
        assert assets[0].tags == ("characters", "hero")
        assert assets[0].category is Category.MODEL

    def test_root_files_have_no_tags(self):
        make_file(self.temp_dir, "settings.json")

        assets = scan(self.temp_dir)

        assert assets[0].tags == ()
        assert assets[0].relative_path == "settings.json"

    def test_uppercase_extension(self):
        make_file(self.temp_dir, "Sprites/HERO.PNG", size=3)

        assets = scan(self.temp_dir)

        assert assets[0].extension == ".png"
        assert assets[0].category is Category.IMAGE
        assert assets[0].name == "HERO"

    def test_dot_only_file_name_is_an_extension(self):
        make_file(self.temp_dir, "textures/.png", size=4)
        make_file(self.temp_dir, "textures/png")

        assets = scan(self.temp_dir)

        assert len(assets) == 1
        assert assets[0].name == ""
        assert assets[0].extension == ".png"
        assert assets[0].file_name == ".png"
        assert assets[0].category is Category.IMAGE

    def test_allowlisted_scripts_land_in_other(self):
        make_file(self.temp_dir, "scripts/player.lua")
        make_file(self.temp_dir, "docs/notes.md")
        make_file(self.temp_dir, "build/game.exe")

        assets = scan(self.temp_dir)

        assert sorted(a.file_name for a in assets) == ["notes.md", "player.lua"]
        assert all(a.category is Category.OTHER for a in assets)

    def test_missing_root_gives_empty_result(self):
        result = self.scanner.scan_directory(self.temp_dir / "does-not-exist")

        assert result.assets == ()
        assert result.total_files == 0
        assert not result.aborted

    def test_file_root_gives_empty_result(self):
        path = make_file(self.temp_dir, "single.png")

        assert scan(path) == ()

    def test_empty_directory(self):
        result = self.scanner.scan_directory(self.temp_dir)

        assert result.assets == ()
        assert result.total_files == 0

    def test_hidden_entries_included_by_default(self):
        make_file(self.temp_dir, ".cache/thumb.png")
        make_file(self.temp_dir, ".hidden.wav")

        assets = scan(self.temp_dir)

        assert len(assets) == 2

    def test_exclude_hidden(self):
        make_file(self.temp_dir, ".cache/thumb.png")
        make_file(self.temp_dir, ".hidden.wav")
        make_file(self.temp_dir, "visible.wav")

        assets = scan(self.temp_dir, ScanOptions(include_hidden=False))

        assert [a.file_name for a in assets] == ["visible.wav"]

    def test_non_recursive(self):
        make_file(self.temp_dir, "top.png")
        make_file(self.temp_dir, "sub/deep.png")

        assets = scan(self.temp_dir, ScanOptions(recursive=False))

        assert [a.file_name for a in assets] == ["top.png"]

    def test_max_depth(self):
        make_file(self.temp_dir, "top.png")
        make_file(self.temp_dir, "a/one.png")
        make_file(self.temp_dir, "a/b/two.png")

        assets = scan(self.temp_dir, ScanOptions(max_depth=1))

        assert sorted(a.file_name for a in assets) == ["one.png", "top.png"]

    def test_progress_callback(self, asset_tree):
        calls = []
        scanner = AssetScanner(progress_callback=lambda seen, found: calls.append((seen, found)))

        scanner.scan_directory(asset_tree)

        assert calls == [(1, 0), (2, 1), (3, 2)]

    def test_failing_progress_callback_does_not_stop_scan(self, asset_tree):
        def explode(seen, found):
            raise RuntimeError("boom")

        result = AssetScanner(progress_callback=explode).scan_directory(asset_tree)

        assert result.asset_count == 2

    def test_config_supplies_default_options(self):
        class FakeConfig:
            def scan_options(self, verbose=False):
                return ScanOptions(recursive=False)

        make_file(self.temp_dir, "top.png")
        make_file(self.temp_dir, "sub/deep.png")

        result = AssetScanner(config=FakeConfig()).scan_directory(self.temp_dir)

        assert [a.file_name for a in result.assets] == ["top.png"]


class TestScanFailures:
    """Test that unreadable files and folders never fail a scan."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.scanner = AssetScanner()

    def teardown_method(self):
        """Clean up test environment."""
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_unreadable_file_is_skipped(self):
        make_file(self.temp_dir, "ok.png")
        make_file(self.temp_dir, "locked.png")
        original_create = Asset.create

        def fake_create(file_path, root):
            if file_path.name == "locked.png":
                raise PermissionError(13, "Permission denied", str(file_path))
            return original_create(file_path, root)

        with patch.object(Asset, "create", side_effect=fake_create):
            result = self.scanner.scan_directory(self.temp_dir)

        assert [a.file_name for a in result.assets] == ["ok.png"]
        assert result.skipped_count == 1
        entry = result.skipped[0]
        assert entry.path.endswith("locked.png")
        assert entry.error_type == "AccessDeniedError"
        assert "Permission denied" in entry.reason
        assert not result.aborted

    def test_unexpected_error_is_skipped(self):
        make_file(self.temp_dir, "odd.png")

        with patch.object(Asset, "create", side_effect=ValueError("bad timestamp")):
            result = self.scanner.scan_directory(self.temp_dir)

        assert result.assets == ()
        assert result.skipped[0].error_type == "ValueError"
        assert result.skipped[0].reason == "bad timestamp"

    def test_unreadable_subdirectory_is_skipped(self):
        make_file(self.temp_dir, "ok.png")
        locked = self.temp_dir / "locked"

        def fake_walk(top, onerror=None, followlinks=False):
            yield str(top), ["locked"], ["ok.png"]
            onerror(PermissionError(13, "Permission denied", str(locked)))

        with patch("asset_browser.core.scanner.os.walk", side_effect=fake_walk):
            result = self.scanner.scan_directory(self.temp_dir)

        assert [a.file_name for a in result.assets] == ["ok.png"]
        assert result.skipped[0].path == str(locked)
        assert not result.aborted

    def test_unlistable_root_aborts(self):
        def fake_walk(top, onerror=None, followlinks=False):
            onerror(PermissionError(13, "Permission denied", str(top)))
            return iter(())

        with patch("asset_browser.core.scanner.os.walk", side_effect=fake_walk):
            result = self.scanner.scan_directory(self.temp_dir)

        assert result.aborted
        assert result.assets == ()

    def test_enumeration_failure_keeps_partial_catalog(self):
        make_file(self.temp_dir, "first.png")

        def fake_walk(top, onerror=None, followlinks=False):
            yield str(top), [], ["first.png"]
            raise OSError("device went away")

        with patch("asset_browser.core.scanner.os.walk", side_effect=fake_walk):
            result = self.scanner.scan_directory(self.temp_dir)

        assert result.aborted
        assert [a.file_name for a in result.assets] == ["first.png"]
