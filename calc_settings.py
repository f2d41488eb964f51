"""
Preferences for the calculator window, kept as JSON beside the application.
"""

import json
import logging
import os
import sys
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

LOGGER_NAME = "calculator"
CONFIG_FILENAME = "config.json"

log = logging.getLogger(LOGGER_NAME)


def get_app_path():
    """Resolve the correct path for both script and frozen (PyInstaller) execution."""
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent


def default_config_path():
    return get_app_path() / CONFIG_FILENAME


def setup_logging(level_name="INFO"):
    """Configure the calculator logger once; CALC_LOG_LEVEL wins over the argument"""
    level_name = os.getenv("CALC_LOG_LEVEL", level_name).upper()
    level = getattr(logging, level_name, logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    logger.addHandler(handler)
    return logger


@dataclass
class Settings:
    """User preferences"""
    display_font: Optional[str] = None
    history_limit: int = 50
    log_level: str = "INFO"

    @classmethod
    def load(cls, path: Path) -> "Settings":
        """Merge the JSON file at `path` over the defaults"""
        settings = cls()
        if not path.exists():
            return settings

        try:
            with open(path, 'r') as f:
                saved = json.load(f)
        except (OSError, ValueError) as e:
            log.error("Error loading config %s: %s", path, e)
            return settings

        if not isinstance(saved, dict):
            log.error("Ignoring config %s: expected an object", path)
            return settings

        known = {f.name for f in fields(cls)}
        for key, value in saved.items():
            if key in known:
                setattr(settings, key, value)

        if not settings._valid_history_limit():
            log.warning("Invalid history_limit %r, using default", settings.history_limit)
            settings.history_limit = cls.history_limit
        if settings.display_font is not None and not isinstance(settings.display_font, str):
            log.warning("Invalid display_font %r, using default", settings.display_font)
            settings.display_font = cls.display_font
        if not isinstance(settings.log_level, str):
            log.warning("Invalid log_level %r, using default", settings.log_level)
            settings.log_level = cls.log_level
        return settings

    def _valid_history_limit(self):
        # bool is an int subclass
        limit = self.history_limit
        return isinstance(limit, int) and not isinstance(limit, bool) and limit >= 1

    def save(self, path: Path) -> None:
        try:
            with open(path, 'w') as f:
                json.dump(asdict(self), f, indent=4)
        except OSError as e:
            log.error("Error saving config %s: %s", path, e)
