import logging
import os

import yaml

from settings_schema import validate_settings

APP_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


class YamlConfig:
    """Load and save engine settings to a YAML file."""

    def __init__(self, path: str = "settings.yaml") -> None:
        self.path = path

    def load(self) -> dict:
        if not os.path.exists(self.path):
            logger.debug("no settings file at %s, using defaults", self.path)
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def save(self, data: dict) -> None:
        out = validate_settings(data)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(out, f)


def load_settings(path: str = "settings.yaml") -> dict:
    """Return validated settings from ``path`` with defaults filled in."""
    return validate_settings(YamlConfig(path).load())
