"""Data models for podcasts, episodes and feed subscriptions."""

import hashlib
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from announcecast.utils.datetime import ensure_aware, now_utc


class Episode(BaseModel):
    """Represents a single podcast episode.

    ``published`` is the ordering key: the most recent episode is the one
    with the greatest value.
    """

    title: str
    link: str | None = None
    description: str = ""
    published: datetime
    guid: str | None = None
    season: int | None = None
    episode: int | None = None
    duration_seconds: int | None = None
    explicit: bool = False
    image_url: str | None = None

    @field_validator("published")
    @classmethod
    def validate_published(cls, v: datetime) -> datetime:
        """Normalize naive timestamps to UTC."""
        return ensure_aware(v)


class Podcast(BaseModel):
    """A parsed podcast feed. Identity is the feed URL."""

    feed_url: str
    title: str
    link: str | None = None
    show_url: str | None = None
    image_url: str | None = None
    description: str = ""
    episodes: list[Episode] = Field(default_factory=list)


def make_feed_id(feed_url: str, length: int = 8) -> str:
    """Derive a short, stable identifier from a feed URL."""
    return hashlib.sha256(feed_url.encode("utf-8")).hexdigest()[:length]


class FeedSubscription(BaseModel):
    """A feed and the channels following it."""

    feed_id: str
    feed_url: str
    title: str
    channel_ids: list[str] = Field(default_factory=list)
    last_posted_key: datetime | None = None  # published time of last dispatched episode
    created_at: datetime = Field(default_factory=now_utc)

    @field_validator("channel_ids")
    @classmethod
    def validate_channel_ids(cls, v: list[str]) -> list[str]:
        """Drop duplicate channels, keeping first-seen order."""
        return list(dict.fromkeys(v))

    @field_validator("last_posted_key")
    @classmethod
    def validate_last_posted_key(cls, v: datetime | None) -> datetime | None:
        """Normalize naive timestamps to UTC."""
        return ensure_aware(v) if v is not None else None
