from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of user preferences as JSON in the user data
directory. Missing or corrupted files fall back to defaults; unknown keys
are dropped when loading so the schema cannot be polluted.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from mergemaster.domain.constants import (
    CURRENT_VERSION,
    DEFAULT_MAX_WORKERS,
    DEFAULT_MIN_SELECTION,
)
from mergemaster.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# Overridable location (tests point it at a temporary directory)
CONFIG_FILE: Optional[str] = None

# -----------------------------------------------------------------------------
# DEFAULTS
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default merge configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "respect_gitignore": True,
        "workspace_root": "",
        "output_path": "",
        "min_selection": DEFAULT_MIN_SELECTION,
        "max_workers": DEFAULT_MAX_WORKERS,
    }


def get_config_path() -> str:
    return CONFIG_FILE or os.path.join(get_user_data_dir(), "config.json")

# -----------------------------------------------------------------------------
# PERSISTENCE
# -----------------------------------------------------------------------------

def load_config() -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    Returns:
        Dict[str, Any]: The stored configuration, or defaults on any failure.
    """
    config = get_default_config()
    path = get_config_path()

    if not os.path.exists(path):
        logger.debug("Config file not found. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    settings = data.get("settings", data)
    if isinstance(settings, dict):
        for key in config:
            if key in settings:
                config[key] = settings[key]
    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist the configuration to disk.

    Args:
        config: Settings to store; unknown keys are ignored.
    """
    path = get_config_path()
    defaults = get_default_config()
    payload = {
        "version": CURRENT_VERSION,
        "settings": {k: config.get(k, v) for k, v in defaults.items()},
    }
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
