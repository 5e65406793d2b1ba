"""Shared fixtures for the Game Asset Browser tests."""

import os
from datetime import datetime
from pathlib import Path

import pytest

from asset_browser.core import config as config_module
from asset_browser.core import logging_config


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config files and logs out of the real home directory."""
    home = tmp_path / "home"
    monkeypatch.setenv(config_module.HOME_ENV_VAR, str(home))
    monkeypatch.setattr(config_module, "_config_manager", None)
    yield home
    if logging_config._logging_manager is not None:
        logging_config._logging_manager.close()
        logging_config._logging_manager = None


def make_file(root: Path, relative: str, size: int = 0, mtime: datetime = None) -> Path:
    """Create a file of the given size below root, optionally with a fixed mtime."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size)
    if mtime is not None:
        stamp = mtime.timestamp()
        os.utime(path, (stamp, stamp))
    return path


@pytest.fixture
def asset_tree(tmp_path):
    """The textures/audio example tree: two assets and one unsupported file."""
    root = tmp_path / "assets"
    make_file(root, "textures/hero.png", size=10 * 1024, mtime=datetime(2024, 1, 1, 12, 0))
    make_file(root, "audio/theme.mp3", size=2 * 1024 * 1024, mtime=datetime(2024, 6, 1, 12, 0))
    make_file(root, "readme.exe", size=100)
    return root
