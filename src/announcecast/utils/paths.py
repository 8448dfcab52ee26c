"""XDG-compliant path helpers for Announcecast."""

import os
from pathlib import Path

import platformdirs

APP_NAME = "announcecast"


def get_config_dir() -> Path:
    """Get the configuration directory.

    Honours ``ANNOUNCECAST_CONFIG_DIR`` and falls back to the platform
    user config dir (``~/.config/announcecast`` on Linux).
    """
    override = os.environ.get("ANNOUNCECAST_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return Path(platformdirs.user_config_dir(APP_NAME))


def get_data_dir() -> Path:
    """Get the data directory holding the feed store."""
    override = os.environ.get("ANNOUNCECAST_DATA_DIR")
    if override:
        return Path(override).expanduser()
    return Path(platformdirs.user_data_dir(APP_NAME))


def get_config_file() -> Path:
    """Get path to config.yaml."""
    return get_config_dir() / "config.yaml"


def get_store_file() -> Path:
    """Get default path to the feed store."""
    return get_data_dir() / "feeds.json"

