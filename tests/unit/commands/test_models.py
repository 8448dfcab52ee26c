"""Tests for command models."""

import pytest
from pydantic import ValidationError

from announcecast.commands.models import (
    CommandEvent,
    FollowCommand,
    FollowingCommand,
    FollowRssCommand,
    HelpCommand,
    SearchCommand,
    UnfollowCommand,
    parse_command,
)


class TestParseCommand:
    """Tests for parse_command."""

    def test_known_commands(self):
        assert parse_command("search", {"keywords": "history"}) == SearchCommand(keywords="history")
        assert parse_command("follow", {"keywords": "history"}) == FollowCommand(keywords="history")
        assert parse_command("follow-rss", {"feed": "https://x.example/rss"}) == FollowRssCommand(
            feed_url="https://x.example/rss"
        )
        assert parse_command("unfollow", {"id": "abcd1234"}) == UnfollowCommand(feed_id="abcd1234")
        assert parse_command("following") == FollowingCommand()
        assert parse_command("help") == HelpCommand()

    def test_unknown_command_is_help(self):
        assert parse_command("dance") == HelpCommand()

    def test_missing_option_is_empty(self):
        assert parse_command("follow", {}) == FollowCommand(keywords="")


class TestCommandEvent:
    """Tests for the discriminated command union."""

    def test_validate_from_dict(self):
        event = CommandEvent.model_validate(
            {"channel_id": "A", "command": {"kind": "unfollow", "feed_id": "abcd1234"}}
        )

        assert isinstance(event.command, UnfollowCommand)
        assert event.command.feed_id == "abcd1234"

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            CommandEvent.model_validate({"channel_id": "A", "command": {"kind": "dance"}})

    def test_round_trip(self):
        event = CommandEvent(channel_id="A", command=SearchCommand(keywords="x"), user_id="u1")

        assert CommandEvent.model_validate(event.model_dump()) == event
