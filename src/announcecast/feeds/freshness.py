"""Decide whether a podcast's latest episode still needs announcing."""

from announcecast.feeds.models import Episode, Podcast
from announcecast.feeds.store import FeedStore
from announcecast.utils.errors import NoEpisodesError


def get_most_recent_podcast_episode(podcast: Podcast) -> Episode:
    """Get the episode with the latest publish time.

    Raises:
        NoEpisodesError: If the podcast has no episodes
    """
    if not podcast.episodes:
        raise NoEpisodesError(podcast.feed_url)
    return max(podcast.episodes, key=lambda episode: episode.published)


def most_recent_podcast_episode_is_new(podcast: Podcast, store: FeedStore) -> bool:
    """Check whether the latest episode is newer than the feed's bookmark.

    A feed that was never posted counts as new. An episode published at
    exactly the bookmark time has already been posted. A podcast without
    episodes is never new.
    """
    try:
        episode = get_most_recent_podcast_episode(podcast)
    except NoEpisodesError:
        return False

    feed = store.get_feed_by_feed_url(podcast.feed_url)
    if feed is None or feed.last_posted_key is None:
        return True

    return episode.published > feed.last_posted_key
