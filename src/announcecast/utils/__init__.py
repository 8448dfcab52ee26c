"""Utility functions and helpers for Announcecast."""

from announcecast.utils.errors import (
    AnnouncecastError,
    ChannelSendError,
    ConfigError,
    FeedParseError,
    InvalidConfigError,
    NoEpisodesError,
    NoMatchError,
    RenderOverflowError,
    SearchError,
    StoreError,
    UnknownFeedError,
)
from announcecast.utils.paths import (
    get_config_dir,
    get_config_file,
    get_data_dir,
    get_store_file,
)

__all__ = [
    # Errors
    "AnnouncecastError",
    "ConfigError",
    "InvalidConfigError",
    "NoMatchError",
    "NoEpisodesError",
    "ChannelSendError",
    "RenderOverflowError",
    "UnknownFeedError",
    "FeedParseError",
    "SearchError",
    "StoreError",
    # Paths
    "get_config_dir",
    "get_data_dir",
    "get_config_file",
    "get_store_file",
]
