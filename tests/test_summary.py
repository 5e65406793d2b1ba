"""Tests for catalog summaries and size formatting."""

from datetime import datetime

from asset_browser.core.classifier import Category
from asset_browser.core.models import Asset, Summary, format_file_size, format_total_size
from asset_browser.core.summary import summarize


def _asset(name, extension, size):
    return Asset(
        name=name,
        full_path=f"/game/{name}{extension}",
        extension=extension,
        size_bytes=size,
        date_modified=datetime(2024, 1, 1),
        relative_path=f"{name}{extension}",
    )


class TestSummarize:
    """Test aggregation over a catalog."""

    def test_empty_catalog(self):
        summary = summarize(())

        assert summary == Summary.empty()
        assert summary.total_assets == 0
        assert summary.total_size_bytes == 0
        assert summary.unique_extensions == 0
        assert all(summary.count_for(category) == 0 for category in Category)
        assert summary.total_size_display == "0.0 KB"

    def test_counts_and_totals(self):
        catalog = (
            _asset("hero", ".png", 10 * 1024),
            _asset("theme", ".mp3", 2 * 1024 * 1024),
            _asset("ui", ".PNG", 1024),
            _asset("level", ".json", 50),
            _asset("notes", ".md", 5),
        )

        summary = summarize(catalog)

        assert summary.total_assets == 5
        assert summary.total_size_bytes == 10 * 1024 + 2 * 1024 * 1024 + 1024 + 50 + 5
        assert summary.image_count == 2
        assert summary.audio_count == 1
        assert summary.model_count == 0
        assert summary.config_count == 1
        assert summary.other_count == 1
        assert summary.unique_extensions == 4

    def test_counts_add_up(self):
        catalog = tuple(_asset(f"a{i}", ext, i) for i, ext in enumerate([".png", ".wav", ".obj", ".ini", ".cs"]))

        summary = summarize(catalog)

        assert sum(summary.category_counts.values()) == summary.total_assets

    def test_to_dict(self):
        summary = summarize((_asset("hero", ".png", 10 * 1024), _asset("theme", ".mp3", 2 * 1024 * 1024)))
        data = summary.to_dict()

        assert data["total_assets"] == 2
        assert data["total_size_display"] == "2.0 MB"
        assert data["category_counts"]["Image"] == 1
        assert data["category_counts"]["Audio"] == 1
        assert data["category_counts"]["Model"] == 0
        assert set(data["category_counts"]) == {c.value for c in Category}


class TestSizeFormatting:
    """Test human readable sizes."""

    def test_file_sizes(self):
        assert format_file_size(0) == "0 B"
        assert format_file_size(1023) == "1023 B"
        assert format_file_size(1024) == "1.0 KB"
        assert format_file_size(1536) == "1.5 KB"
        assert format_file_size(1024 * 1024) == "1.0 MB"
        assert format_file_size(3 * 1024 ** 3) == "3.00 GB"

    def test_total_sizes(self):
        assert format_total_size(0) == "0.0 KB"
        assert format_total_size(512) == "0.5 KB"
        assert format_total_size(10 * 1024) == "10.0 KB"
        assert format_total_size(5 * 1024 * 1024) == "5.0 MB"
        assert format_total_size(2 * 1024 ** 3) == "2.00 GB"

    def test_asset_size_display(self):
        assert _asset("hero", ".png", 10 * 1024).size_display == "10.0 KB"
