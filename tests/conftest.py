"""Shared fixtures for Announcecast tests."""

from pathlib import Path

import pytest

from announcecast.config.schema import MessageConfig
from announcecast.feeds.models import Podcast
from announcecast.feeds.store import FeedStore
from announcecast.messages.factory import MessageFactory

from tests.helpers import FakeChatClient, make_podcast


@pytest.fixture
def podcast() -> Podcast:
    return make_podcast()


@pytest.fixture
def store() -> FeedStore:
    """In-memory feed store."""
    return FeedStore()


@pytest.fixture
def file_store(tmp_path: Path) -> FeedStore:
    return FeedStore(tmp_path / "feeds.json")


@pytest.fixture
def chat() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def factory() -> MessageFactory:
    return MessageFactory(MessageConfig())


@pytest.fixture
def sample_config_dict() -> dict:
    return {
        "version": "1",
        "log_level": "INFO",
        "search": {"country": "GB", "result_limit": 2},
        "messages": {"description_limit": 2000},
    }
