"""Logging configuration and utilities for the Game Asset Browser."""

import logging
import logging.handlers
import platform
import sys
from pathlib import Path
from typing import Optional, Dict
from .config import LoggingConfig, get_config


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        """Format log record with a colored level name."""
        original = record.levelname
        if original in self.COLORS:
            record.levelname = f"{self.COLORS[original]}{original}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


class LoggingManager:
    """Manages logging configuration and setup."""

    def __init__(self, config: Optional[LoggingConfig] = None):
        """
        Initialize logging manager.

        Args:
            config: Logging configuration. If None, uses global config.
        """
        self.config = config or get_config().logging
        self.handlers: Dict[str, logging.Handler] = {}
        self._setup_root_logger()

    def _setup_root_logger(self):
        """Set up the root logger with configured handlers."""
        root_logger = logging.getLogger()

        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)

        log_level = getattr(logging, str(self.config.level).upper(), None)
        if isinstance(log_level, int):
            root_logger.setLevel(log_level)
        else:
            root_logger.setLevel(logging.INFO)
            root_logger.warning(f"Invalid log level '{self.config.level}', using INFO")

        if self.config.console_enabled:
            console_handler = self._create_console_handler()
            root_logger.addHandler(console_handler)
            self.handlers['console'] = console_handler

        if self.config.file_enabled and self.config.file_path:
            file_handler = self._create_file_handler()
            if file_handler:
                root_logger.addHandler(file_handler)
                self.handlers['file'] = file_handler

    def _create_console_handler(self) -> logging.Handler:
        """Create and configure console handler."""
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColoredFormatter(self.config.format))
        return handler

    def _create_file_handler(self) -> Optional[logging.Handler]:
        """Create and configure rotating file handler."""
        try:
            self.config.file_path.parent.mkdir(parents=True, exist_ok=True)

            max_bytes = self.config.file_max_size_mb * 1024 * 1024
            handler = logging.handlers.RotatingFileHandler(
                self.config.file_path,
                maxBytes=max_bytes,
                backupCount=self.config.file_backup_count
            )
            handler.setFormatter(logging.Formatter(self.config.format))
            return handler

        except OSError as e:
            logging.getLogger(__name__).error(f"Failed to create file handler: {e}")
            return None

    def get_logger(self, name: str) -> logging.Logger:
        """Get a named logger."""
        return logging.getLogger(name)

    def set_level(self, level: str):
        """
        Set the logging level for all loggers.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        log_level = getattr(logging, level.upper(), None)
        if not isinstance(log_level, int):
            logging.getLogger(__name__).error(f"Invalid log level: {level}")
            return

        logging.getLogger().setLevel(log_level)
        self.config.level = level.upper()

    def enable_debug_logging(self):
        """Enable debug logging with source locations."""
        self.set_level('DEBUG')

        debug_format = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(funcName)s - %(message)s'

        for name, handler in self.handlers.items():
            if name == 'console':
                handler.setFormatter(ColoredFormatter(debug_format))
            else:
                handler.setFormatter(logging.Formatter(debug_format))

    def log_system_info(self):
        """Log system information for debugging."""
        logger = self.get_logger(__name__)
        logger.debug("=== System Information ===")
        logger.debug(f"Platform: {platform.platform()}")
        logger.debug(f"Python version: {sys.version}")
        logger.debug(f"Working directory: {Path.cwd()}")
        logger.debug(f"Log file: {self.config.file_path if self.config.file_enabled else 'disabled'}")
        logger.debug("=== End System Information ===")

    def close(self):
        """Detach and close the handlers installed by this manager."""
        root_logger = logging.getLogger()
        for handler in self.handlers.values():
            root_logger.removeHandler(handler)
            handler.close()
        self.handlers.clear()


# Global logging manager instance
_logging_manager = None


def setup_logging(config: Optional[LoggingConfig] = None) -> LoggingManager:
    """
    Set up global logging configuration.

    Args:
        config: Optional logging configuration

    Returns:
        LoggingManager instance
    """
    global _logging_manager
    if _logging_manager is not None:
        _logging_manager.close()
    _logging_manager = LoggingManager(config)
    return _logging_manager
