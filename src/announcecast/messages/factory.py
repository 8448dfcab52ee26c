"""Builds the chat messages Announcecast sends."""

from announcecast.config.schema import MessageConfig
from announcecast.feeds.freshness import get_most_recent_podcast_episode
from announcecast.feeds.models import Episode, FeedSubscription, Podcast
from announcecast.messages.models import OutgoingMessage, Overflow, Rendered, RenderResult
from announcecast.utils.text import compress_description, format_duration, truncate_text

EXPLICIT_NOTICE = "Parental Advisory - Explicit Content"
NO_MATCHES_TEXT = "Nothing was found matching your query."
ERROR_TEXT = "Something went wrong. Check the bot's permissions, your input, and the podcast data."

HELP_TEXT = """\
`/search keywords` find podcasts by title
`/follow keywords` follow the single podcast matching the keywords
`/follow-rss feed` follow a podcast by its RSS feed URL
`/unfollow id` stop following a podcast (ids are shown by `/following`)
`/following` list the podcasts this channel follows"""


class MessageFactory:
    """Renders podcasts and subscriptions into ``OutgoingMessage`` objects.

    All methods are pure; none of them touch the store or the network.
    """

    def __init__(self, config: MessageConfig | None = None) -> None:
        self.config = config or MessageConfig()

    def build_podcast_episode_message(self, podcast: Podcast) -> OutgoingMessage:
        """Announce the podcast's most recent episode.

        Raises:
            NoEpisodesError: If the podcast has no episodes
        """
        episode = get_most_recent_podcast_episode(podcast)

        return OutgoingMessage(
            author_name=podcast.title,
            author_url=podcast.link or podcast.show_url,
            author_icon_url=podcast.image_url,
            title=episode.title,
            url=episode.link,
            description=compress_description(
                episode.description, self.config.episode_description_limit
            ),
            image_url=episode.image_url or podcast.image_url,
            footer=episode_footer(episode) or None,
        )

    def build_followed_message(
        self, podcast: Podcast, feeds: list[FeedSubscription]
    ) -> OutgoingMessage:
        """Confirm a follow and show the channel's updated listing."""
        return OutgoingMessage(
            title=f"Now following {podcast.title}",
            author_icon_url=podcast.image_url,
            description=self._listing(feeds),
        )

    def build_unfollowed_message(
        self, title: str, feeds: list[FeedSubscription]
    ) -> OutgoingMessage:
        """Confirm an unfollow and show the channel's updated listing."""
        return OutgoingMessage(
            title=f"Unfollowed {title}",
            description=self._listing(feeds),
        )

    def build_following_message(self, feeds: list[FeedSubscription]) -> RenderResult:
        """Render a batch of the channel's subscriptions.

        Returns ``Overflow`` instead of a message when the batch does not
        fit in one message body.
        """
        description = "\n".join(feed_line(feed) for feed in feeds)
        if len(description) > self.config.description_limit:
            return Overflow(size=len(description), limit=self.config.description_limit)

        return Rendered(OutgoingMessage(title="Following", description=description))

    def build_not_following_message(self) -> OutgoingMessage:
        return OutgoingMessage(
            title="Following",
            description="This channel isn't following any podcasts yet. Use `/follow` to add one.",
        )

    def build_search_message(self, podcasts: list[Podcast]) -> OutgoingMessage:
        """List search results with the feed URL needed by ``/follow-rss``."""
        lines = []
        for index, podcast in enumerate(podcasts, 1):
            lines.append(f"**{index}. {podcast.title}**")
            lines.append(podcast.feed_url)
            if podcast.link:
                lines.append(podcast.link)

        return OutgoingMessage(
            title="Search results",
            description=truncate_text("\n".join(lines), self.config.description_limit),
        )

    def build_help_message(self) -> OutgoingMessage:
        return OutgoingMessage(title="Announcecast help", description=HELP_TEXT)

    def build_no_matches_message(self) -> OutgoingMessage:
        return OutgoingMessage(description=NO_MATCHES_TEXT)

    def build_error_message(self) -> OutgoingMessage:
        return OutgoingMessage(description=ERROR_TEXT)

    def _listing(self, feeds: list[FeedSubscription]) -> str:
        if not feeds:
            return "This channel isn't following any podcasts."
        listing = "\n".join(feed_line(feed) for feed in feeds)
        return truncate_text(listing, self.config.description_limit)


def feed_line(feed: FeedSubscription) -> str:
    """One listing entry: id, title and feed URL."""
    return f"`{feed.feed_id}` **{feed.title}**\n{feed.feed_url}"


def episode_footer(episode: Episode) -> str:
    """Footer like ``S2:E14 | 1h 2m 3s | Parental Advisory - Explicit Content``."""
    episode_text = ""
    if episode.season:
        episode_text += f"S{episode.season}"
    if episode.season and episode.episode:
        episode_text += ":"
    if episode.episode:
        episode_text += f"E{episode.episode}"

    pieces = [
        episode_text,
        format_duration(episode.duration_seconds),
        EXPLICIT_NOTICE if episode.explicit else "",
    ]
    return " | ".join(piece for piece in pieces if piece)
