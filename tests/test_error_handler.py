"""Tests for scan-time error translation."""

import errno
import logging

from asset_browser.core.error_handler import ErrorHandler
from asset_browser.core.exceptions import AccessDeniedError, FileSystemError, PathNotFoundError
from asset_browser.core.models import SkippedEntry


class TestErrorHandler:
    """Test translating OS errors into application errors."""

    def setup_method(self):
        self.handler = ErrorHandler(logging.getLogger("asset_browser.test"))

    def test_permission_error(self):
        error = self.handler.translate_file_system_error(PermissionError("denied"), "/game/a.png")

        assert isinstance(error, AccessDeniedError)
        assert "a.png" in str(error)

    def test_missing_file(self):
        error = self.handler.translate_file_system_error(FileNotFoundError(), "/game/gone.png")

        assert isinstance(error, PathNotFoundError)

    def test_errno_is_checked(self):
        error = self.handler.translate_file_system_error(OSError(errno.EACCES, "nope"), "/game/x")

        assert isinstance(error, AccessDeniedError)

    def test_other_os_error(self):
        error = self.handler.translate_file_system_error(OSError(errno.EIO, "I/O error"), "/game/x")

        assert type(error) is FileSystemError

    def test_error_counts(self):
        self.handler.translate_file_system_error(PermissionError(), "/a")
        self.handler.translate_file_system_error(PermissionError(), "/b")

        assert self.handler.error_counts == {"PermissionError": 2}

    def test_record_skipped(self):
        entry = self.handler.record_skipped(PermissionError(), "/game/locked.png")

        assert entry == SkippedEntry(
            path="/game/locked.png",
            reason="Permission denied: /game/locked.png",
            error_type="AccessDeniedError",
        )
        assert entry.to_dict()["error_type"] == "AccessDeniedError"

    def test_log_error_summary_accepts_mixed_input(self):
        entries = [
            SkippedEntry("/a", "Permission denied: /a", "AccessDeniedError"),
            ValueError("bad"),
        ]

        self.handler.log_error_summary(entries, "scan")
        self.handler.log_error_summary([], "scan")
