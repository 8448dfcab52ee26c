"""Test builders and fakes shared across test modules."""

from datetime import datetime, timedelta, timezone

from announcecast.commands.models import CommandEvent
from announcecast.feeds.models import Episode, Podcast
from announcecast.messages.models import OutgoingMessage
from announcecast.utils.errors import ChannelSendError
from announcecast.utils.retry import RetryConfig

BASE_TIME = datetime(2025, 1, 6, 12, 0, tzinfo=timezone.utc)

# Minimal delays so retry paths run quickly
FAST_RETRY_CONFIG = RetryConfig(
    max_attempts=3,
    max_wait_seconds=0.1,
    min_wait_seconds=0.01,
    jitter=False,
)


def make_episode(title: str = "Episode", days: int = 0, **kwargs) -> Episode:
    """Build an episode published ``days`` after BASE_TIME."""
    return Episode(
        title=title,
        link=kwargs.pop("link", f"https://example.com/{title.lower().replace(' ', '-')}"),
        description=kwargs.pop("description", f"<p>{title} notes</p>"),
        published=BASE_TIME + timedelta(days=days),
        **kwargs,
    )


def make_podcast(
    feed_url: str = "https://example.com/feed.xml",
    title: str = "Test Podcast",
    episodes: list[Episode] | None = None,
) -> Podcast:
    return Podcast(
        feed_url=feed_url,
        title=title,
        link="https://example.com",
        image_url="https://example.com/art.jpg",
        episodes=[make_episode("Episode 1")] if episodes is None else episodes,
    )


class FakeChatClient:
    """Records sends and replies; channels in ``failing`` raise."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.sent: list[tuple[str, OutgoingMessage]] = []
        self.replies: list[tuple[str, OutgoingMessage]] = []

    async def send(self, channel_id: str, message: OutgoingMessage) -> None:
        if channel_id in self.failing:
            raise ChannelSendError(channel_id)
        self.sent.append((channel_id, message))

    async def reply(self, event: CommandEvent, message: OutgoingMessage) -> None:
        self.replies.append((event.channel_id, message))

    def sent_to(self) -> list[str]:
        return [channel for channel, _ in self.sent]
