"""
Configuration management for Menugen.

This module handles loading and accessing configuration values from menugen.yaml.
It decides where the menu structure lives, which database file to use, and which
optional link features the host supports.
"""

import sys
import yaml
from pathlib import Path
from typing import Any, Dict
import logging


class ConfigManager:
    """
    Manages configuration loading and access for Menugen.
    """

    def __init__(self, config_path: str = "menugen.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logging.debug(f"Using default configuration: {e}")
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "paths": {
                "structure_file": "gen_menu.yml",
                "log_file": "menugen.log"
            },
            "database": {
                "filename": "menugen.db"
            },
            "generator": {
                "default_language": "en",
                "supports_attributes": True,
                "default_attributes": {},
                "dedupe_items": False
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "database.filename")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("paths.structure_file")  # Returns "gen_menu.yml"
            config.get("generator.dedupe_items")  # Returns False
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def structure_file(self) -> str:
        """Get the menu structure file path."""
        return self.get("paths.structure_file", "gen_menu.yml")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "menugen.log")

    @property
    def database_filename(self) -> str:
        """Get database filename."""
        return self.get("database.filename", "menugen.db")

    @property
    def default_language(self) -> str:
        return self.get("generator.default_language", "en")

    @property
    def supports_attributes(self) -> bool:
        """Whether the host stores link attributes."""
        return bool(self.get("generator.supports_attributes", True))

    @property
    def default_attributes(self) -> Dict[str, str]:
        """Get the attributes every new link starts with."""
        return dict(self.get("generator.default_attributes", {}) or {})

    @property
    def dedupe_items(self) -> bool:
        """Whether existing links are reused instead of created again."""
        return bool(self.get("generator.dedupe_items", False))


def setup_logging(cfg: ConfigManager) -> None:
    """Configure logging for the application."""
    level = getattr(logging, cfg.get("logging.level", "INFO").upper())
    format_str = cfg.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(cfg.log_filename)
        ]
    )


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
