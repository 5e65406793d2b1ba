"""Error handling utilities for the Game Asset Browser."""

import errno
import logging
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import AccessDeniedError, FileSystemError, PathNotFoundError
from .models import SkippedEntry


class ErrorHandler:
    """Centralized translation and reporting of scan-time failures."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize error handler.

        Args:
            logger: Logger instance to use for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)
        self.error_counts = {}

    def translate_file_system_error(self, error: Exception, file_path: Union[str, Path]) -> FileSystemError:
        """
        Turn a low-level OS error into the matching application exception.

        Args:
            error: The exception that occurred
            file_path: Path where the error occurred

        Returns:
            FileSystemError subclass describing the failure
        """
        file_path = Path(file_path) if isinstance(file_path, str) else file_path
        error_type = type(error).__name__
        self.error_counts[error_type] = self.error_counts.get(error_type, 0) + 1

        if isinstance(error, PermissionError) or getattr(error, "errno", None) == errno.EACCES:
            self.logger.warning(f"Permission denied accessing {file_path}: {error}")
            return AccessDeniedError(f"Permission denied: {file_path}")
        elif isinstance(error, FileNotFoundError) or getattr(error, "errno", None) == errno.ENOENT:
            self.logger.warning(f"File not found: {file_path}")
            return PathNotFoundError(f"Path not found: {file_path}")
        elif isinstance(error, OSError):
            self.logger.warning(f"File system error accessing {file_path}: {error}")
            return FileSystemError(f"File system error: {error}")
        else:
            self.logger.error(f"Unexpected file system error: {error}")
            return FileSystemError(f"Unexpected file system error: {error}")

    def record_skipped(self, error: Exception, file_path: Union[str, Path]) -> SkippedEntry:
        """
        Describe a file that is left out of a scan.

        Args:
            error: The exception raised while reading the file
            file_path: Path of the unreadable file

        Returns:
            SkippedEntry carrying the translated reason
        """
        translated = self.translate_file_system_error(error, file_path)
        return SkippedEntry(
            path=str(file_path),
            reason=str(translated),
            error_type=type(translated).__name__,
        )

    def log_error_summary(self, errors: List[Union[Exception, SkippedEntry]], operation: str = "operation"):
        """
        Log a summary of errors that occurred during an operation.

        Args:
            errors: Exceptions or skipped entries collected during the operation
            operation: Description of the operation
        """
        if not errors:
            return

        error_counts = {}
        for error in errors:
            error_type = error.error_type if isinstance(error, SkippedEntry) else type(error).__name__
            error_counts[error_type] = error_counts.get(error_type, 0) + 1

        self.logger.warning(f"Error summary for {operation}:")
        for error_type, count in error_counts.items():
            self.logger.warning(f"  {error_type}: {count} occurrences")

        unique_messages = set()
        for error in errors[:10]:
            message = error.reason if isinstance(error, SkippedEntry) else str(error)
            if message not in unique_messages:
                unique_messages.add(message)
                self.logger.warning(f"  Example: {message}")
