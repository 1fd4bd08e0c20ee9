"""
User settings for dotmix, stored as YAML in the settings directory.
"""
from pathlib import Path
import logging

import yaml
from pydantic import BaseModel, Field, ValidationError

SETTINGS_FILE = "settings.yaml"

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Configuration settings for dotmix."""
    loose_equality: bool = Field(True, description="fetch matches 10 with '10' unless disabled")
    replace_conflicts: bool = Field(
        True, description="set/unflatten replace untraversable intermediate nodes instead of raising"
    )
    indent: int = Field(2, ge=0, description="Indentation for JSON output")
    verbose: bool = False

    model_config = {"extra": "ignore"}


# --- Persistence functions ---

def load_settings(settings_dir: Path) -> Settings:
    """Load settings from a YAML file in the settings directory."""
    path = settings_dir / SETTINGS_FILE
    if not path.exists():
        return Settings()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return Settings.model_validate(data)
    except (yaml.YAMLError, ValidationError, TypeError) as e:
        # If file is corrupted or invalid, return default settings (failsafe)
        logger.warning("Ignoring invalid settings file %s: %s", path, e)
        return Settings()


def save_settings(settings_dir: Path, settings: Settings) -> Path:
    """Save settings to a YAML file in the settings directory."""
    settings_dir.mkdir(parents=True, exist_ok=True)
    path = settings_dir / SETTINGS_FILE
    path.write_text(yaml.safe_dump(settings.model_dump(), sort_keys=False), encoding="utf-8")
    return path
