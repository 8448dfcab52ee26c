"""Announcecast bot: the surface a chat platform and a poll scheduler call.

``receive_command`` and ``notify_new_episode`` schedule their work as
background tasks and return immediately; failures end up in the log,
never in the caller.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from announcecast.chat import ChatClient
from announcecast.commands.handler import SubscriptionCommandHandler
from announcecast.commands.models import CommandEvent
from announcecast.config.schema import GlobalConfig
from announcecast.dispatch import DispatchResult, NotificationDispatcher
from announcecast.feeds.freshness import most_recent_podcast_episode_is_new
from announcecast.feeds.models import Podcast
from announcecast.feeds.parser import RSSParser
from announcecast.feeds.store import FeedStore
from announcecast.messages.factory import MessageFactory
from announcecast.search.apple import AppleSearchClient

logger = logging.getLogger(__name__)


@dataclass
class PollSummary:
    """Result of one pass over every stored feed."""

    checked: int = 0
    unreadable: list[str] = field(default_factory=list)
    dispatched: list[DispatchResult] = field(default_factory=list)


class Bot:
    """Wires the command handler and dispatcher to a chat client."""

    def __init__(
        self,
        store: FeedStore,
        handler: SubscriptionCommandHandler,
        dispatcher: NotificationDispatcher,
        parser: RSSParser,
    ) -> None:
        self.store = store
        self.handler = handler
        self.dispatcher = dispatcher
        self.parser = parser
        self._tasks: set[asyncio.Task] = set()

    def receive_command(self, event: CommandEvent) -> asyncio.Task:
        """Handle a chat command in the background."""
        return self._spawn(
            self.handler.receive_command(event),
            f"command:{event.command.kind}:{event.channel_id}",
        )

    def notify_new_episode(self, podcast: Podcast, channel_id: str | None = None) -> asyncio.Task:
        """Announce a podcast's latest episode in the background."""
        return self._spawn(self.dispatcher.dispatch(podcast, channel_id), f"dispatch:{podcast.feed_url}")

    async def poll(self) -> PollSummary:
        """Check every stored feed once and announce new episodes.

        Feeds are fetched concurrently; dispatch passes then run one feed
        at a time. A feed whose fetch raises is counted as unreadable and
        does not stop the pass.
        """
        feeds = self.store.list_feeds()
        podcasts = await asyncio.gather(
            *(self.parser.process(feed.feed_url) for feed in feeds),
            return_exceptions=True,
        )

        summary = PollSummary(checked=len(feeds))
        for feed, podcast in zip(feeds, podcasts):
            if isinstance(podcast, BaseException):
                logger.error("Failed to read %s", feed.feed_url, exc_info=podcast)
                summary.unreadable.append(feed.feed_url)
                continue
            if podcast is None:
                summary.unreadable.append(feed.feed_url)
                continue
            if not most_recent_podcast_episode_is_new(podcast, self.store):
                logger.debug("No new episode for %s", feed.feed_url)
                continue
            summary.dispatched.append(await self.dispatcher.dispatch(podcast))

        logger.info(
            "Poll complete: %d feeds checked, %d dispatched, %d unreadable",
            summary.checked,
            len(summary.dispatched),
            len(summary.unreadable),
        )
        return summary

    async def drain(self) -> None:
        """Wait for every background task started so far."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _spawn(self, coro, name: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Task %s was cancelled", task.get_name())
            return
        error = task.exception()
        if error is not None:
            logger.error("Task %s failed", task.get_name(), exc_info=error)


def create_bot(config: GlobalConfig, chat: ChatClient, store_file: Path | None) -> Bot:
    """Build a Bot with its dependencies wired from ``config``."""
    store = FeedStore(store_file)
    factory = MessageFactory(config.messages)
    parser = RSSParser(
        timeout=config.feeds.timeout_seconds,
        user_agent=config.feeds.user_agent,
    )
    search = AppleSearchClient(parser=parser, config=config.search)
    dispatcher = NotificationDispatcher(store, chat, factory)
    handler = SubscriptionCommandHandler(
        store=store,
        dispatcher=dispatcher,
        chat=chat,
        factory=factory,
        search=search,
        parser=parser,
        search_results=config.search.result_limit,
    )
    return Bot(store=store, handler=handler, dispatcher=dispatcher, parser=parser)
