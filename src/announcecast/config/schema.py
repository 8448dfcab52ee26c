"""Configuration schema models using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class SearchConfig(BaseModel):
    """Podcast search provider configuration."""

    base_url: str = "https://itunes.apple.com/search"
    country: str = "US"
    result_limit: int = Field(default=4, ge=1, le=25)  # Results shown by the search command
    timeout_seconds: float = 30.0


class FeedFetchConfig(BaseModel):
    """RSS feed fetching configuration."""

    timeout_seconds: float = 30.0
    user_agent: str = "announcecast/0.1 (+https://github.com/announcecast/announcecast)"


class MessageConfig(BaseModel):
    """Outgoing message limits."""

    description_limit: int = Field(default=4096, gt=0)  # Chat embed description ceiling
    episode_description_limit: int = Field(default=1024, gt=0)


class GlobalConfig(BaseModel):
    """Global Announcecast configuration."""

    version: str = "1"
    log_level: LogLevel = "INFO"
    store_file: Path | None = None  # If None, uses the XDG data dir

    search: SearchConfig = Field(default_factory=SearchConfig)
    feeds: FeedFetchConfig = Field(default_factory=FeedFetchConfig)
    messages: MessageConfig = Field(default_factory=MessageConfig)
