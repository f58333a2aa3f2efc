"""
Configuration management module.

This module handles loading, validating, and providing access to
configuration parameters from a YAML file (config.yaml by default).
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigurationError


class Config:
    """
    Configuration manager that loads and validates config.yaml.

    Provides dotted-key access to the ``jira``, ``http``, ``logging``,
    ``filters`` and ``progress`` sections with sensible defaults.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize configuration from YAML file.

        Args:
            config_path: Path to configuration file (default: config.yaml)

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the file is not valid YAML or required
                fields are missing
        """
        self.config_path = config_path
        self._config: Dict[str, Any] = {}
        self._load_config()
        self._validate_config()
        self._create_directories()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}"
            )

        with open(self.config_path, 'r', encoding='utf-8') as f:
            try:
                self._config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Error parsing config file {self.config_path}: {e}"
                ) from e

        if not isinstance(self._config, dict):
            raise ConfigurationError(
                f"Config file {self.config_path} must contain a mapping"
            )

    def _validate_config(self) -> None:
        """
        Validate required configuration fields.

        Raises:
            ConfigurationError: If required fields are missing or invalid
        """
        for section in ('jira', 'logging'):
            if not isinstance(self._config.get(section), dict):
                raise ConfigurationError(
                    f"Required configuration section '{section}' is missing"
                )

        for key in ('base_url', 'username'):
            if not self._config['jira'].get(key):
                raise ConfigurationError(f"jira.{key} is required")

        numeric_fields = [
            ('http', 'max_retries'),
            ('http', 'request_timeout'),
            ('http', 'page_size'),
            ('http', 'retry_delay'),
        ]

        for section, field in numeric_fields:
            value = (self._config.get(section) or {}).get(field)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{section}.{field} must be a number")
            if value <= 0:
                raise ConfigurationError(f"{section}.{field} must be positive")

    def _create_directories(self) -> None:
        """Create the log directory if it doesn't exist."""
        log_dir = self.get('logging.log_dir')
        if log_dir:
            Path(log_dir).mkdir(parents=True, exist_ok=True)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., 'jira.base_url')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Examples:
            >>> config.get('jira.base_url')
            'https://jira.example.com'
            >>> config.get('http.page_size')
            100
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Override a value using dot notation, creating sections as needed."""
        *sections, last = key.split('.')
        target = self._config
        for section in sections:
            target = target.setdefault(section, {})
        target[last] = value

    @property
    def jira_base_url(self) -> str:
        """Get Jira base URL."""
        return self.get('jira.base_url')

    @property
    def legacy_project(self) -> Optional[str]:
        """Get the project key of the legacy single filter, if any."""
        return self.get('jira.legacy_project')

    @property
    def max_retries(self) -> int:
        """Get maximum number of retries."""
        return self.get('http.max_retries', 5)

    @property
    def retry_delay(self) -> float:
        """Get backoff factor for retries in seconds."""
        return self.get('http.retry_delay', 2.0)

    @property
    def request_timeout(self) -> int:
        """Get request timeout in seconds."""
        return self.get('http.request_timeout', 30)

    @property
    def page_size(self) -> int:
        """Get number of issues requested per search page."""
        return self.get('http.page_size', 100)

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self.get('logging.level', 'INFO')

    @property
    def filter_store_path(self) -> str:
        """Get path of the application filter store."""
        return self.get('filters.store_path', 'data/filters.json')

    @property
    def show_progress(self) -> bool:
        """Whether bulk operations display progress bars."""
        return bool(self.get('progress.enabled', False))

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(base_url={self.jira_base_url}, user={self.get('jira.username')})"


def load_config(config_path: str = "config.yaml") -> Config:
    """
    Load configuration from file.

    Args:
        config_path: Path to configuration file

    Returns:
        Config object
    """
    return Config(config_path)
