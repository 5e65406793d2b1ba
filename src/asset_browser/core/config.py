"""Configuration management for the Game Asset Browser."""

import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field, fields
import configparser
import json

from .exceptions import ConfigurationError
from .models import ScanOptions

HOME_ENV_VAR = "ASSET_BROWSER_HOME"


def default_data_dir() -> Path:
    """Directory holding the config file and logs."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".asset_browser"


@dataclass
class ScanConfig:
    """Scanning configuration settings."""
    default_recursive: bool = True
    default_include_hidden: bool = True
    default_max_depth: Optional[int] = None
    follow_symlinks: bool = False


@dataclass
class WebConfig:
    """Web API configuration settings."""
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False
    secret_key: str = "dev-key-change-in-production"
    default_root: Optional[Path] = None


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_enabled: bool = True
    file_path: Optional[Path] = None
    file_max_size_mb: int = 10
    file_backup_count: int = 5
    console_enabled: bool = True

    def __post_init__(self):
        if self.file_path is None:
            self.file_path = default_data_dir() / "logs" / "app.log"


@dataclass
class AppConfig:
    """Main application configuration."""
    scan: ScanConfig = field(default_factory=ScanConfig)
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    app_name: str = "Game Asset Browser"
    version: str = "0.1.0"
    data_dir: Path = field(default_factory=default_data_dir)

    def __post_init__(self):
        self.data_dir.mkdir(parents=True, exist_ok=True)

        if self.logging.file_enabled and self.logging.file_path:
            self.logging.file_path.parent.mkdir(parents=True, exist_ok=True)

    def scan_options(self, verbose: bool = False) -> ScanOptions:
        """Build scan options from the configured defaults."""
        return ScanOptions(
            recursive=self.scan.default_recursive,
            include_hidden=self.scan.default_include_hidden,
            max_depth=self.scan.default_max_depth,
            follow_symlinks=self.scan.follow_symlinks,
            verbose=verbose,
        )


SECTIONS = ("scan", "web", "logging")

# Settings whose value may legitimately be unset.
OPTIONAL_SETTINGS = {
    ("scan", "default_max_depth"): int,
    ("web", "default_root"): Path,
    ("logging", "file_path"): Path,
}


def _coerce(section: str, setting: str, current: Any, raw: str) -> Any:
    """Convert a raw INI/CLI string to the type of the current setting."""
    optional_type = OPTIONAL_SETTINGS.get((section, setting))
    if optional_type is not None:
        if raw.strip() in ("", "None", "none"):
            return None
        return optional_type(raw)

    if isinstance(current, bool):
        lowered = raw.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"Not a boolean: {raw}")
    elif isinstance(current, int):
        return int(raw)
    elif isinstance(current, float):
        return float(raw)
    elif isinstance(current, Path):
        return Path(raw)
    return raw


def _render(value: Any) -> str:
    return "None" if value is None else str(value)


class ConfigManager:
    """Manages application configuration from an INI file."""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to configuration file. If None, uses default location.
        """
        if config_file is None:
            config_file = default_data_dir() / "config.ini"

        self.config_file = Path(config_file)
        self.config = AppConfig()
        self.logger = logging.getLogger(__name__)

        if self.config_file.exists():
            self.load_from_file()
        else:
            self.save_to_file()

    def load_from_file(self) -> None:
        """Load configuration from INI file."""
        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read(self.config_file)
        except configparser.Error as e:
            self.logger.error(f"Error loading configuration from {self.config_file}: {e}")
            return

        for section in SECTIONS:
            if section not in parser:
                continue
            section_obj = getattr(self.config, section)
            for setting, raw in parser[section].items():
                if not hasattr(section_obj, setting):
                    self.logger.warning(f"Unknown configuration key: {section}.{setting}")
                    continue
                try:
                    value = _coerce(section, setting, getattr(section_obj, setting), raw)
                except ValueError as e:
                    self.logger.error(f"Invalid value for {section}.{setting}: {e}")
                    continue
                setattr(section_obj, setting, value)

        self.logger.info(f"Configuration loaded from {self.config_file}")

    def save_to_file(self) -> None:
        """Save current configuration to INI file."""
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)

            parser = configparser.ConfigParser(interpolation=None)
            for section, values in self.as_dict().items():
                parser[section] = {key: _render(value) for key, value in values.items()}

            with open(self.config_file, 'w') as f:
                parser.write(f)

            self.logger.info(f"Configuration saved to {self.config_file}")

        except OSError as e:
            self.logger.error(f"Error saving configuration to {self.config_file}: {e}")

    def get_config(self) -> AppConfig:
        """Get the current configuration."""
        return self.config

    def set_value(self, key: str, raw_value: str) -> Any:
        """
        Set a configuration value from dotted notation (e.g. 'web.port').

        Args:
            key: 'section.setting' key
            raw_value: Value as typed by the user

        Returns:
            The converted value that was stored

        Raises:
            ConfigurationError: If the key is unknown or the value cannot be converted
        """
        keys = key.split('.')
        if len(keys) != 2:
            raise ConfigurationError("Key must be in format 'section.key' (e.g., 'web.port')")

        section, setting = keys
        if section not in SECTIONS:
            raise ConfigurationError(f"Unknown configuration section: {section}")

        section_obj = getattr(self.config, section)
        if not hasattr(section_obj, setting):
            raise ConfigurationError(f"Unknown setting '{setting}' in section '{section}'")

        try:
            value = _coerce(section, setting, getattr(section_obj, setting), raw_value)
        except ValueError as e:
            raise ConfigurationError(f"Invalid value for {key}: {e}") from e

        setattr(section_obj, setting, value)
        self.save_to_file()
        return value

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self.config = AppConfig()
        self.save_to_file()
        self.logger.info("Configuration reset to defaults")

    def as_dict(self) -> Dict[str, Dict[str, Any]]:
        """Return the configurable sections as nested dictionaries."""
        result = {}
        for section in SECTIONS:
            section_obj = getattr(self.config, section)
            result[section] = {f.name: getattr(section_obj, f.name) for f in fields(section_obj)}
        return result

    def export_to_json(self, file_path: Path) -> None:
        """
        Export configuration to JSON format.

        Args:
            file_path: Path to save JSON file
        """
        config_dict = {
            section: {
                key: str(value) if isinstance(value, Path) else value
                for key, value in values.items()
            }
            for section, values in self.as_dict().items()
        }

        with open(file_path, 'w') as f:
            json.dump(config_dict, f, indent=2)

        self.logger.info(f"Configuration exported to {file_path}")


# Global configuration instance
_config_manager = None


def get_config() -> AppConfig:
    """Get the global application configuration."""
    return get_config_manager().get_config()


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def setup_config(config_file: Optional[Path] = None) -> ConfigManager:
    """
    Set up global configuration.

    Args:
        config_file: Optional path to configuration file

    Returns:
        ConfigManager instance
    """
    global _config_manager
    _config_manager = ConfigManager(config_file)
    return _config_manager
