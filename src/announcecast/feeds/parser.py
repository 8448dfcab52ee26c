"""RSS feed parser using feedparser."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

import feedparser
import requests

from announcecast.feeds.models import Episode, Podcast
from announcecast.utils.errors import FeedParseError
from announcecast.utils.retry import (
    DEFAULT_RETRY_CONFIG,
    RetryConfig,
    classify_request_exception,
    with_retry,
)
from announcecast.utils.text import parse_duration

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "announcecast/0.1"
EXPLICIT_VALUES = {"yes", "true", "explicit"}


class RSSParser:
    """Fetches RSS feeds and turns them into ``Podcast`` models."""

    def __init__(
        self,
        timeout: float = 30,
        user_agent: str = DEFAULT_USER_AGENT,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """Initialize the RSS parser.

        Args:
            timeout: HTTP request timeout in seconds.
            user_agent: User-Agent header sent to feed hosts.
            retry_config: Retry policy for transient HTTP failures.
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._download = with_retry(config=retry_config or DEFAULT_RETRY_CONFIG)(
            self._download_once
        )

    async def process(self, feed_url: str) -> Podcast | None:
        """Fetch and parse a feed.

        Returns:
            The parsed podcast, or None if the feed could not be read
        """
        try:
            return await self.fetch_feed(feed_url)
        except FeedParseError as e:
            logger.warning("Could not process feed %s: %s", feed_url, e)
            return None

    async def fetch_feed(self, feed_url: str) -> Podcast:
        """Fetch and parse a feed.

        Raises:
            FeedParseError: If downloading or parsing fails
        """
        try:
            content = await asyncio.to_thread(self._download, feed_url)
        except Exception as e:
            raise FeedParseError(f"Failed to download {feed_url}: {e}") from e

        return self.parse(feed_url, content)

    def parse(self, feed_url: str, content: bytes | str) -> Podcast:
        """Parse raw feed content.

        Args:
            feed_url: URL the content was fetched from (podcast identity)
            content: RSS document

        Raises:
            FeedParseError: If the document is not a usable feed
        """
        parsed = feedparser.parse(content)
        feed = parsed.get("feed", {})

        if parsed.get("bozo") and not feed.get("title") and not parsed.get("entries"):
            raise FeedParseError(
                f"Invalid feed at {feed_url}: {parsed.get('bozo_exception')}"
            )

        image_url = _image_href(feed)
        episodes = []
        for entry in parsed.get("entries", []):
            episode = self._parse_entry(entry)
            if episode is not None:
                episodes.append(episode)

        return Podcast(
            feed_url=feed_url,
            title=feed.get("title") or feed_url,
            link=feed.get("link"),
            show_url=feed.get("link"),
            image_url=image_url,
            description=feed.get("subtitle") or feed.get("description") or "",
            episodes=episodes,
        )

    def _parse_entry(self, entry: Any) -> Episode | None:
        published = _entry_datetime(entry)
        if published is None:
            logger.debug("Skipping entry without a date: %s", entry.get("title"))
            return None

        return Episode(
            title=entry.get("title") or "Untitled episode",
            link=entry.get("link"),
            description=entry.get("summary") or entry.get("description") or "",
            published=published,
            guid=entry.get("id"),
            season=_to_int(entry.get("itunes_season")),
            episode=_to_int(entry.get("itunes_episode")),
            duration_seconds=parse_duration(entry.get("itunes_duration")),
            explicit=_is_explicit(entry.get("itunes_explicit")),
            image_url=_image_href(entry),
        )

    def _download_once(self, feed_url: str) -> bytes:
        try:
            response = requests.get(
                feed_url,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise classify_request_exception(e) from e

        logger.debug("Downloaded %s (%d bytes)", feed_url, len(response.content))
        return response.content


def _entry_datetime(entry: Any) -> datetime | None:
    parsed_time = entry.get("published_parsed") or entry.get("updated_parsed")
    if not parsed_time:
        return None
    return datetime(*parsed_time[:6], tzinfo=timezone.utc)


def _image_href(node: Any) -> str | None:
    image = node.get("image")
    if isinstance(image, dict):
        return image.get("href") or image.get("url")
    return None


def _to_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _is_explicit(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in EXPLICIT_VALUES
    return False
