"""Subscription command handling.

Turns chat commands into feed store changes, confirmation replies and,
after a follow, an announcement of the podcast's latest episode.
"""

import logging
from typing import Protocol, assert_never

from announcecast.chat import ChatClient
from announcecast.commands.models import (
    CommandEvent,
    FollowCommand,
    FollowingCommand,
    FollowRssCommand,
    HelpCommand,
    SearchCommand,
    UnfollowCommand,
)
from announcecast.dispatch import NotificationDispatcher
from announcecast.feeds.models import Podcast
from announcecast.feeds.store import FeedStore
from announcecast.messages.factory import MessageFactory
from announcecast.messages.paginator import paginate
from announcecast.utils.errors import NoMatchError, UnknownFeedError

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_RESULTS = 4


class PodcastSearch(Protocol):
    async def search(self, term: str, max_results: int) -> list[Podcast]: ...


class FeedProcessor(Protocol):
    async def process(self, feed_url: str) -> Podcast | None: ...


class SubscriptionCommandHandler:
    """Handles search, follow, follow-rss, unfollow, following and help.

    ``receive_command`` never raises: any failure is logged and the user
    gets a generic error reply.
    """

    def __init__(
        self,
        store: FeedStore,
        dispatcher: NotificationDispatcher,
        chat: ChatClient,
        factory: MessageFactory,
        search: PodcastSearch,
        parser: FeedProcessor,
        search_results: int = DEFAULT_SEARCH_RESULTS,
    ) -> None:
        self.store = store
        self.dispatcher = dispatcher
        self.chat = chat
        self.factory = factory
        self.search_client = search
        self.parser = parser
        self.search_results = search_results

    async def receive_command(self, event: CommandEvent) -> None:
        """Run one command, replying to the channel it came from."""
        try:
            await self.handle(event)
        except Exception as e:
            logger.exception(
                "receive_command failed: command=%s event=%s error=%s",
                event.command.kind,
                event.model_dump(),
                e,
            )
            await self._reply_error(event)

    async def handle(self, event: CommandEvent) -> None:
        """Run one command, letting failures propagate."""
        command = event.command
        match command:
            case SearchCommand():
                await self.search(event, command)
            case FollowCommand():
                await self.follow(event, command)
            case FollowRssCommand():
                await self.follow_rss(event, command)
            case UnfollowCommand():
                await self.unfollow(event, command)
            case FollowingCommand():
                await self.following(event)
            case HelpCommand():
                await self.chat.reply(event, self.factory.build_help_message())
            case _:
                assert_never(command)

    async def search(self, event: CommandEvent, command: SearchCommand) -> None:
        podcasts = await self.search_client.search(command.keywords, self.search_results)
        if not podcasts:
            await self._reply_no_matches(event)
            return
        await self.chat.reply(event, self.factory.build_search_message(podcasts))

    async def follow(self, event: CommandEvent, command: FollowCommand) -> None:
        podcasts = await self.search_client.search(command.keywords, 1)
        await self._follow_podcast_list(event, podcasts)

    async def follow_rss(self, event: CommandEvent, command: FollowRssCommand) -> None:
        podcast = await self.parser.process(command.feed_url) if command.feed_url else None
        await self._follow_podcast_list(event, [podcast] if podcast else [])

    async def unfollow(self, event: CommandEvent, command: UnfollowCommand) -> None:
        try:
            feed = self.store.require_feed(command.feed_id)
        except UnknownFeedError:
            await self._reply_no_matches(event)
            return
        if event.channel_id not in feed.channel_ids:
            await self._reply_no_matches(event)
            return

        async with self.dispatcher.locks.hold(feed.feed_url):
            self.store.remove_feed(feed.feed_id, event.channel_id)

        feeds = self.store.get_feeds_by_channel_id(event.channel_id)
        await self.chat.reply(event, self.factory.build_unfollowed_message(feed.title, feeds))

    async def following(self, event: CommandEvent) -> None:
        feeds = self.store.get_feeds_by_channel_id(event.channel_id)
        if not feeds:
            await self.chat.send(event.channel_id, self.factory.build_not_following_message())
            return

        for message in paginate(feeds, self.factory.build_following_message):
            await self.chat.send(event.channel_id, message)

    async def _follow_podcast_list(self, event: CommandEvent, podcasts: list[Podcast]) -> None:
        try:
            podcast = single_match(podcasts)
        except NoMatchError:
            await self._reply_no_matches(event)
            return

        async with self.dispatcher.locks.hold(podcast.feed_url):
            self.store.add_feed(podcast, event.channel_id)

        feeds = self.store.get_feeds_by_channel_id(event.channel_id)
        await self.chat.reply(event, self.factory.build_followed_message(podcast, feeds))

        await self.dispatcher.dispatch_after_follow(podcast, event.channel_id)

    async def _reply_no_matches(self, event: CommandEvent) -> None:
        await self.chat.reply(event, self.factory.build_no_matches_message())

    async def _reply_error(self, event: CommandEvent) -> None:
        try:
            await self.chat.reply(event, self.factory.build_error_message())
        except Exception:
            logger.exception("Failed to send error reply to channel %s", event.channel_id)


def single_match(podcasts: list[Podcast]) -> Podcast:
    """Return the only podcast in ``podcasts``.

    Raises:
        NoMatchError: If there are zero or several candidates
    """
    if len(podcasts) != 1:
        raise NoMatchError(count=len(podcasts))
    return podcasts[0]
