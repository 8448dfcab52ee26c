"""Chat command models.

Every command kind is its own model with a ``kind`` tag; ``Command`` is
the closed union the handler matches on.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field


class SearchCommand(BaseModel):
    kind: Literal["search"] = "search"
    keywords: str


class FollowCommand(BaseModel):
    kind: Literal["follow"] = "follow"
    keywords: str


class FollowRssCommand(BaseModel):
    kind: Literal["follow-rss"] = "follow-rss"
    feed_url: str


class UnfollowCommand(BaseModel):
    kind: Literal["unfollow"] = "unfollow"
    feed_id: str


class FollowingCommand(BaseModel):
    kind: Literal["following"] = "following"


class HelpCommand(BaseModel):
    kind: Literal["help"] = "help"


Command = Annotated[
    SearchCommand
    | FollowCommand
    | FollowRssCommand
    | UnfollowCommand
    | FollowingCommand
    | HelpCommand,
    Field(discriminator="kind"),
]


class CommandEvent(BaseModel):
    """A command issued in a channel."""

    channel_id: str
    command: Command
    user_id: str | None = None


def parse_command(name: str, options: dict[str, Any] | None = None) -> Command:
    """Build a typed command from a platform's command name and options.

    Unknown names become ``HelpCommand``; missing options become empty
    strings, which the handler treats as "no matches".
    """
    options = options or {}
    match name:
        case "search":
            return SearchCommand(keywords=str(options.get("keywords") or ""))
        case "follow":
            return FollowCommand(keywords=str(options.get("keywords") or ""))
        case "follow-rss":
            return FollowRssCommand(feed_url=str(options.get("feed") or ""))
        case "unfollow":
            return UnfollowCommand(feed_id=str(options.get("id") or ""))
        case "following":
            return FollowingCommand()
        case _:
            return HelpCommand()
