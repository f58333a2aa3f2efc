"""
Utility functions for the adapter.

Includes logging setup, URL joining, JQL quoting and small dictionary
helpers.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

import colorlog


def setup_logging(config) -> logging.Logger:
    """
    Set up logging with file and console handlers.

    Args:
        config: Configuration object

    Returns:
        Configured logger
    """
    log_dir = Path(config.get('logging.log_dir', 'logs'))
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime('%Y%m%d')
    log_file = log_dir / f"jira_tracker_{timestamp}.log"

    log_level = getattr(logging, config.log_level.upper())
    log_format = config.get(
        'logging.format',
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(log_format))

    console_handler = colorlog.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(colorlog.ColoredFormatter(
        '%(log_color)s%(levelname)-8s%(reset)s %(message)s',
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        }
    ))

    logger = logging.getLogger('jira_tracker')
    logger.setLevel(log_level)
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    # Suppress noisy libraries
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('requests').setLevel(logging.WARNING)

    logger.debug(f"Logging initialized. Log file: {log_file}")
    return logger


def combine_paths(base_url: str, relative_url: str) -> str:
    """
    Join a base URL and a relative path with exactly one slash between them.

    Examples:
        >>> combine_paths('http://h/', '/rest')
        'http://h/rest'
        >>> combine_paths('http://h', 'rest')
        'http://h/rest'
    """
    relative_url = relative_url or ''
    if base_url.endswith('/'):
        return base_url + relative_url[1:] if relative_url.startswith('/') else base_url + relative_url
    return base_url + relative_url if relative_url.startswith('/') else f"{base_url}/{relative_url}"


def jql_quote(value: str) -> str:
    """Quote a value for use as a JQL string literal."""
    return '"' + value.replace('\\', '\\\\').replace('"', '\\"') + '"'


def clean_text(text: str) -> str:
    """
    Collapse runs of whitespace and strip the ends.

    Args:
        text: Text to clean

    Returns:
        Cleaned text
    """
    if not text:
        return ""

    return re.sub(r'\s+', ' ', text).strip()


def safe_get(data: Dict, *keys, default=None) -> Any:
    """
    Safely get nested dictionary value.

    Args:
        data: Dictionary to query
        *keys: Keys to traverse
        default: Default value if not found

    Returns:
        Value at nested key or default

    Example:
        >>> safe_get(issue, 'fields', 'status', 'id', default='')
    """
    current = data
    for key in keys:
        if isinstance(current, dict):
            current = current.get(key)
            if current is None:
                return default
        else:
            return default
    return current if current is not None else default


def first_wins(pairs) -> Dict[str, str]:
    """
    Group (key, value) pairs by key, keeping the first value seen per key.

    Insertion order of the first occurrence of every key is preserved.
    """
    grouped: Dict[str, str] = {}
    for key, value in pairs:
        grouped.setdefault(key, value)
    return grouped
