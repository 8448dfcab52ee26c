"""Configuration management for Announcecast."""

from announcecast.config.manager import ConfigManager
from announcecast.config.schema import FeedFetchConfig, GlobalConfig, MessageConfig, SearchConfig

__all__ = ["ConfigManager", "GlobalConfig", "SearchConfig", "FeedFetchConfig", "MessageConfig"]
