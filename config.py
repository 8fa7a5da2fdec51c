import logging
import os

import yaml

from localization import translator
from settings_schema import EngineSettings, validate_settings

logger = logging.getLogger(__name__)


class YamlConfig:
    """Load and save engine settings to a YAML file."""

    def __init__(self, path: str | None = None) -> None:
        self.path = path or os.environ.get("COACH_ENGINE_SETTINGS", "settings.yaml")

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            logger.warning("ignoring non-mapping settings file %s", self.path)
            return {}
        return data

    def save(self, data: dict) -> None:
        validate_settings(data)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(dict(data), f)


def load_settings(config: YamlConfig | None = None) -> EngineSettings:
    """Read, validate and apply settings; unknown keys are ignored."""
    data = (config or YamlConfig()).load()
    validate_settings(data)
    settings = EngineSettings(**data)
    translator.set_language(settings.language)
    return settings
