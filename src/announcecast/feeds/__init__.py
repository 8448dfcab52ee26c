"""Feed models, storage and RSS parsing for Announcecast."""

from announcecast.feeds.freshness import (
    get_most_recent_podcast_episode,
    most_recent_podcast_episode_is_new,
)
from announcecast.feeds.models import Episode, FeedSubscription, Podcast
from announcecast.feeds.parser import RSSParser
from announcecast.feeds.store import FeedStore

__all__ = [
    "Episode",
    "Podcast",
    "FeedSubscription",
    "FeedStore",
    "RSSParser",
    "get_most_recent_podcast_episode",
    "most_recent_podcast_episode_is_new",
]
