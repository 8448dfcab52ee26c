"""Podcast search backed by the iTunes Search API."""

import asyncio
import logging
from typing import Any

import requests

from announcecast.config.schema import SearchConfig
from announcecast.feeds.models import Podcast
from announcecast.feeds.parser import RSSParser
from announcecast.utils.errors import SearchError
from announcecast.utils.retry import (
    DEFAULT_RETRY_CONFIG,
    RetryConfig,
    classify_request_exception,
    with_retry,
)

logger = logging.getLogger(__name__)


class AppleSearchClient:
    """Finds podcasts by title and resolves them through their RSS feeds.

    Results without a usable feed URL are skipped, and so are feeds that
    fail to parse, so the returned list can be shorter than requested.

    Example:
        >>> client = AppleSearchClient(parser=RSSParser())
        >>> podcasts = await client.search("hardcore history", 1)
    """

    def __init__(
        self,
        parser: RSSParser,
        config: SearchConfig | None = None,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """Initialize the search client.

        Args:
            parser: Parser used to resolve each result's feed
            config: Search settings (endpoint, country, timeout)
            retry_config: Retry policy for the search request
        """
        self.parser = parser
        self.config = config or SearchConfig()
        self._lookup = with_retry(config=retry_config or DEFAULT_RETRY_CONFIG)(
            self._lookup_once
        )

    async def search(self, term: str, max_results: int) -> list[Podcast]:
        """Search for podcasts whose title matches ``term``.

        Args:
            term: Search keywords
            max_results: Maximum number of results to request

        Returns:
            Parsed podcasts in provider order (may be empty)

        Raises:
            SearchError: If the search request itself fails
        """
        if not term.strip():
            return []

        try:
            data = await asyncio.to_thread(self._lookup, term, max_results)
        except Exception as e:
            raise SearchError(f"Podcast search for '{term}' failed: {e}") from e

        feed_urls = extract_feed_urls(data)
        logger.debug("Search '%s' returned %d feeds", term, len(feed_urls))

        podcasts = await asyncio.gather(*(self.parser.process(url) for url in feed_urls))
        return [podcast for podcast in podcasts if podcast is not None]

    def _lookup_once(self, term: str, max_results: int) -> dict[str, Any]:
        params = {
            "term": term,
            "country": self.config.country,
            "media": "podcast",
            "attribute": "titleTerm",
            "limit": max_results,
        }
        try:
            response = requests.get(
                self.config.base_url,
                params=params,
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise classify_request_exception(e) from e


def extract_feed_urls(data: dict[str, Any]) -> list[str]:
    """Pull the http(s) feed URLs out of a search response."""
    urls = []
    for result in data.get("results", []):
        feed_url = result.get("feedUrl") or ""
        if not feed_url.startswith(("http://", "https://")):
            continue
        urls.append(feed_url)
    return urls
