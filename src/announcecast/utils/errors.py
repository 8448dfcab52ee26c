"""Custom exceptions for Announcecast."""


class AnnouncecastError(Exception):
    """Base exception for all Announcecast errors."""

    pass


class ConfigError(AnnouncecastError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class NoMatchError(AnnouncecastError):
    """Search or feed lookup did not produce exactly one podcast."""

    def __init__(self, message: str = "Nothing was found matching your query.", count: int = 0) -> None:
        super().__init__(message)
        self.count = count


class NoEpisodesError(AnnouncecastError):
    """Podcast has no episodes to announce."""

    def __init__(self, feed_url: str) -> None:
        super().__init__(f"Podcast '{feed_url}' has no episodes")
        self.feed_url = feed_url


class ChannelSendError(AnnouncecastError):
    """Delivering a message to a single channel failed."""

    def __init__(self, channel_id: str, message: str = "") -> None:
        super().__init__(message or f"Failed to send message to channel '{channel_id}'")
        self.channel_id = channel_id


class RenderOverflowError(AnnouncecastError):
    """A single entry does not fit in one message on its own."""

    pass


class UnknownFeedError(AnnouncecastError):
    """Feed identifier is not in the store."""

    def __init__(self, feed_id: str) -> None:
        super().__init__(f"Feed '{feed_id}' not found")
        self.feed_id = feed_id


class FeedParseError(AnnouncecastError):
    """RSS feed could not be fetched or parsed."""

    pass


class SearchError(AnnouncecastError):
    """Podcast search provider failed."""

    pass


class StoreError(AnnouncecastError):
    """Feed store could not be read or written."""

    pass
