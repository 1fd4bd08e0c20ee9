"""
Default locations for configuration.
"""
import os
from pathlib import Path
from platformdirs import user_config_dir

APP_NAME = 'dotmix'
SETTINGS_DIR_ENV = 'DOTMIX_SETTINGS_DIR'

def default_settings_dir() -> Path:
    """Get the settings directory, honouring DOTMIX_SETTINGS_DIR."""
    if env := os.getenv(SETTINGS_DIR_ENV):
        return Path(env).expanduser().resolve()
    return Path(user_config_dir(APP_NAME)).expanduser().resolve()
