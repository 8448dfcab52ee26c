"""Persistent feed subscription store.

Keeps the feed -> channels and channel -> feeds views plus the
last-posted bookmark for every feed. Both views are derived from the
same set of ``FeedSubscription`` records, so they cannot drift apart.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from announcecast.feeds.models import Episode, FeedSubscription, Podcast, make_feed_id
from announcecast.utils.errors import StoreError, UnknownFeedError

logger = logging.getLogger(__name__)


class StoreDocument(BaseModel):
    """On-disk layout of the feed store."""

    version: int = 1
    feeds: list[FeedSubscription] = Field(default_factory=list)


class FeedStore:
    """Feed subscriptions keyed by feed URL.

    Every mutation is written through to ``path`` (atomic replace) before
    the call returns, so reads always reflect the last completed write.
    With ``path=None`` the store lives in memory only.

    Example:
        >>> store = FeedStore(Path("feeds.json"))
        >>> store.add_feed(podcast, "channel-1")
        >>> store.get_channels_by_feed_url(podcast.feed_url)
        {'channel-1'}
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the store, loading existing state from ``path``.

        Args:
            path: JSON file backing the store, or None for in-memory

        Raises:
            StoreError: If the existing file cannot be parsed
        """
        self.path = path
        self._lock = threading.Lock()
        self._feeds: dict[str, FeedSubscription] = {}

        if self.path is not None and self.path.exists():
            self._feeds = {feed.feed_url: feed for feed in self._load().feeds}
            logger.debug("Loaded %d feeds from %s", len(self._feeds), self.path)

    def add_feed(self, podcast: Podcast, channel_id: str) -> FeedSubscription:
        """Subscribe ``channel_id`` to the podcast's feed.

        Re-adding an already subscribed channel leaves the channel set
        unchanged; the stored title is refreshed from ``podcast``.

        Returns:
            Copy of the stored subscription

        Raises:
            StoreError: If the write fails; the store is left unchanged
        """
        with self._lock:
            current = self._feeds.get(podcast.feed_url)
            if current is None:
                feed = FeedSubscription(
                    feed_id=self._new_feed_id(podcast.feed_url),
                    feed_url=podcast.feed_url,
                    title=podcast.title,
                    channel_ids=[channel_id],
                )
            else:
                feed = current.model_copy(deep=True)
                feed.title = podcast.title
                if channel_id not in feed.channel_ids:
                    feed.channel_ids.append(channel_id)

            self._commit({**self._feeds, podcast.feed_url: feed})
            if current is None:
                logger.info("Created subscription %s for %s", feed.feed_id, feed.feed_url)
            return feed.model_copy(deep=True)

    def remove_feed(self, feed_id: str, channel_id: str) -> None:
        """Unsubscribe ``channel_id`` from the feed with ``feed_id``.

        Does nothing if the channel was not subscribed. The subscription
        is deleted once its last channel is removed.
        """
        with self._lock:
            current = self._find_by_id(feed_id)
            if current is None or channel_id not in current.channel_ids:
                return

            feed = current.model_copy(deep=True)
            feed.channel_ids.remove(channel_id)
            feeds = dict(self._feeds)
            if feed.channel_ids:
                feeds[feed.feed_url] = feed
            else:
                del feeds[feed.feed_url]

            self._commit(feeds)
            if not feed.channel_ids:
                logger.info("Deleted subscription %s (%s)", feed.feed_id, feed.feed_url)

    def get_channels_by_feed_url(self, feed_url: str) -> set[str]:
        """Get the channels subscribed to a feed (empty for unknown feeds)."""
        with self._lock:
            feed = self._feeds.get(feed_url)
            return set(feed.channel_ids) if feed else set()

    def get_feeds_by_channel_id(self, channel_id: str) -> list[FeedSubscription]:
        """Get a channel's subscriptions, oldest first."""
        with self._lock:
            feeds = [
                feed.model_copy(deep=True)
                for feed in self._feeds.values()
                if channel_id in feed.channel_ids
            ]
        return sorted(feeds, key=lambda feed: feed.created_at)

    def get_feed_by_feed_id(self, feed_id: str) -> FeedSubscription | None:
        """Look up a subscription by its user-facing identifier."""
        with self._lock:
            feed = self._find_by_id(feed_id)
            return feed.model_copy(deep=True) if feed else None

    def require_feed(self, feed_id: str) -> FeedSubscription:
        """Look up a subscription by identifier.

        Raises:
            UnknownFeedError: If no subscription has ``feed_id``
        """
        feed = self.get_feed_by_feed_id(feed_id)
        if feed is None:
            raise UnknownFeedError(feed_id)
        return feed

    def get_feed_by_feed_url(self, feed_url: str) -> FeedSubscription | None:
        """Look up a subscription by feed URL."""
        with self._lock:
            feed = self._feeds.get(feed_url)
            return feed.model_copy(deep=True) if feed else None

    def list_feeds(self) -> list[FeedSubscription]:
        """List every subscription, oldest first."""
        with self._lock:
            feeds = [feed.model_copy(deep=True) for feed in self._feeds.values()]
        return sorted(feeds, key=lambda feed: feed.created_at)

    def update_posted_data(self, feed_url: str, episode: Episode) -> None:
        """Record ``episode`` as the last one posted for ``feed_url``.

        Unknown feeds are ignored. The bookmark never moves backwards: an
        episode older than the stored bookmark leaves it untouched.
        """
        with self._lock:
            feed = self._feeds.get(feed_url)
            if feed is None:
                logger.debug("Ignoring posted data for unknown feed %s", feed_url)
                return

            if feed.last_posted_key is not None and episode.published <= feed.last_posted_key:
                return

            feed.last_posted_key = episode.published
            try:
                self._save(self._feeds)
            except StoreError:
                logger.error("Failed to persist bookmark for %s", feed_url, exc_info=True)

    def _find_by_id(self, feed_id: str) -> FeedSubscription | None:
        for feed in self._feeds.values():
            if feed.feed_id == feed_id:
                return feed
        return None

    def _new_feed_id(self, feed_url: str) -> str:
        """Derive a feed id, lengthening it on the rare prefix collision."""
        taken = {feed.feed_id for feed in self._feeds.values()}
        length = 8
        feed_id = make_feed_id(feed_url, length)
        while feed_id in taken:
            length += 2
            feed_id = make_feed_id(feed_url, length)
        return feed_id

    def _load(self) -> StoreDocument:
        assert self.path is not None
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return StoreDocument.model_validate(json.load(f))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise StoreError(f"Failed to load feed store {self.path}: {e}") from e

    def _commit(self, feeds: dict[str, FeedSubscription]) -> None:
        """Persist ``feeds`` and only then make it the current state."""
        self._save(feeds)
        self._feeds = feeds

    def _save(self, feeds: dict[str, FeedSubscription]) -> None:
        """Write the store atomically (temp file, fsync, rename)."""
        if self.path is None:
            return

        document = StoreDocument(feeds=list(feeds.values()))
        content = document.model_dump_json(indent=2)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=".tmp_", suffix=".json"
        )

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())

            Path(temp_path).replace(self.path)
        except OSError as e:
            Path(temp_path).unlink(missing_ok=True)
            raise StoreError(f"Failed to save feed store {self.path}: {e}") from e
