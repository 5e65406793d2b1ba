"""Custom exceptions for the Game Asset Browser."""


class AssetBrowserError(Exception):
    """Base exception for asset browser errors."""
    pass


class FileSystemError(AssetBrowserError):
    """Exception for file system related errors."""
    pass


class ScanError(AssetBrowserError):
    """Exception for scanning operation errors."""
    pass


class ValidationError(AssetBrowserError):
    """Exception for invalid input coming from a caller."""
    pass


class ConfigurationError(AssetBrowserError):
    """Exception for configuration related errors."""
    pass


class AccessDeniedError(FileSystemError):
    """Exception for file permission errors."""
    pass


class PathNotFoundError(FileSystemError):
    """Exception for path not found errors."""
    pass


class ScanInProgressError(ScanError):
    """Raised when a scan is requested while another one is still running."""
    pass
