"""
Settings for the fractal explorer, loaded from settings.json.

The file next to this module holds the defaults. A different file can be
passed to load_settings(); a missing or unreadable file falls back to the
built-in defaults with a warning.
"""

import json
import logging
import os
from dataclasses import dataclass

from .errors import InvalidConfigurationError
from .gradient import GRADIENTS

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class Settings:
    gradient: str = 'Default'
    threads: int = None
    warmup: bool = True
    log_level: str = 'WARNING'


def _read_json(path):
    try:
        with open(path, 'r') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load %s: %s", path, e)
        return None


def parse_settings(data):
    """
    Build Settings from a decoded settings.json document.

    Missing keys keep their defaults.

    Raises:
        InvalidConfigurationError for values of the wrong type or range
    """
    if not isinstance(data, dict):
        raise InvalidConfigurationError("Settings must be a JSON object")
    defaults = Settings()
    render = data.get('render') or {}
    logging_section = data.get('logging') or {}

    gradient = data.get('gradient', defaults.gradient)
    if gradient not in GRADIENTS:
        raise InvalidConfigurationError(
            f"Unknown gradient {gradient!r}, expected one of {list(GRADIENTS)}"
        )

    threads = render.get('threads', defaults.threads)
    if threads is not None and (isinstance(threads, bool)
                                or not isinstance(threads, int) or threads < 1):
        raise InvalidConfigurationError(
            f"render.threads must be a positive integer or null, got {threads!r}"
        )

    warmup = render.get('warmup', defaults.warmup)
    if not isinstance(warmup, bool):
        raise InvalidConfigurationError(f"render.warmup must be a boolean, got {warmup!r}")

    level = str(logging_section.get('level', defaults.log_level)).upper()
    if level not in LOG_LEVELS:
        raise InvalidConfigurationError(
            f"logging.level must be one of {LOG_LEVELS}, got {level!r}"
        )

    return Settings(gradient=gradient, threads=threads, warmup=warmup, log_level=level)


def load_settings(path=None):
    """
    Load settings from a JSON file.

    Args:
        path: Settings file (default: settings.json beside this module)

    Returns:
        Settings
    """
    data = _read_json(path or DEFAULT_SETTINGS_PATH)
    if data is None:
        return Settings()
    return parse_settings(data)
