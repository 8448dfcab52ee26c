"""Notification dispatch for newly published episodes.

Sends a podcast's most recent episode to the channels following it and
advances the feed's bookmark after each delivery that succeeds.
"""

import logging
from dataclasses import dataclass, field

from announcecast.chat import ChatClient
from announcecast.feeds.freshness import (
    get_most_recent_podcast_episode,
    most_recent_podcast_episode_is_new,
)
from announcecast.feeds.models import Podcast
from announcecast.feeds.store import FeedStore
from announcecast.messages.factory import MessageFactory
from announcecast.messages.models import OutgoingMessage
from announcecast.utils.errors import ChannelSendError, NoEpisodesError
from announcecast.utils.locks import KeyedLock

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Outcome of one dispatch pass."""

    feed_url: str
    sent: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def delivered(self) -> bool:
        return bool(self.sent)


class NotificationDispatcher:
    """Delivers episode announcements to subscribed channels.

    Channels are sent to one after another. A failure on one channel is
    logged and the pass moves on to the next channel; bookmark updates
    already made for earlier channels stay in place.

    Example:
        >>> dispatcher = NotificationDispatcher(store, chat, MessageFactory())
        >>> result = await dispatcher.dispatch(podcast)
        >>> result.sent
        ['channel-1', 'channel-2']
    """

    def __init__(
        self,
        store: FeedStore,
        chat: ChatClient,
        factory: MessageFactory,
        locks: KeyedLock | None = None,
    ) -> None:
        """Initialize dispatcher.

        Args:
            store: Feed store holding subscriptions and bookmarks
            chat: Chat client used to deliver messages
            factory: Message renderer
            locks: Per-feed locks shared with the command handler
        """
        self.store = store
        self.chat = chat
        self.factory = factory
        self.locks = locks or KeyedLock()

    async def dispatch(self, podcast: Podcast, channel_id: str | None = None) -> DispatchResult:
        """Announce the podcast's most recent episode.

        Args:
            podcast: Parsed podcast
            channel_id: Send only to this channel; all subscribers if None

        Returns:
            Which channels were reached and which failed
        """
        async with self.locks.hold(podcast.feed_url):
            return await self._dispatch(podcast, channel_id)

    async def dispatch_after_follow(self, podcast: Podcast, channel_id: str) -> DispatchResult:
        """Announce a podcast that ``channel_id`` just followed.

        If the latest episode was already posted, only the following
        channel gets it; other subscribers are not sent a repeat.
        """
        async with self.locks.hold(podcast.feed_url):
            if most_recent_podcast_episode_is_new(podcast, self.store):
                return await self._dispatch(podcast, None)
            return await self._dispatch(podcast, channel_id)

    async def _dispatch(self, podcast: Podcast, channel_id: str | None) -> DispatchResult:
        result = DispatchResult(feed_url=podcast.feed_url)

        try:
            episode = get_most_recent_podcast_episode(podcast)
        except NoEpisodesError:
            logger.warning("Skipping dispatch for %s: podcast has no episodes", podcast.feed_url)
            return result

        message = self.factory.build_podcast_episode_message(podcast)

        if channel_id:
            channels = [channel_id]
        else:
            channels = sorted(self.store.get_channels_by_feed_url(podcast.feed_url))

        for target in channels:
            if await self._send(target, message):
                result.sent.append(target)
                self.store.update_posted_data(podcast.feed_url, episode)
            else:
                result.failed.append(target)

        logger.info(
            "Dispatched '%s' from %s: %d sent, %d failed",
            episode.title,
            podcast.feed_url,
            len(result.sent),
            len(result.failed),
        )
        return result

    async def _send(self, channel_id: str, message: OutgoingMessage) -> bool:
        try:
            await self.chat.send(channel_id, message)
        except ChannelSendError as e:
            logger.error("Message send failure: channel=%s title=%r error=%s", channel_id, message.title, e)
            return False
        except Exception:
            logger.exception("Message send failure: channel=%s title=%r", channel_id, message.title)
            return False

        logger.info("Message send success: channel=%s title=%r", channel_id, message.title)
        return True
