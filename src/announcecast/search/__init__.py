"""Podcast search providers."""

from announcecast.search.apple import AppleSearchClient

__all__ = ["AppleSearchClient"]
