"""Chat commands and their handler."""

from announcecast.commands.handler import SubscriptionCommandHandler
from announcecast.commands.models import (
    Command,
    CommandEvent,
    FollowCommand,
    FollowingCommand,
    FollowRssCommand,
    HelpCommand,
    SearchCommand,
    UnfollowCommand,
    parse_command,
)

__all__ = [
    "SubscriptionCommandHandler",
    "Command",
    "CommandEvent",
    "SearchCommand",
    "FollowCommand",
    "FollowRssCommand",
    "UnfollowCommand",
    "FollowingCommand",
    "HelpCommand",
    "parse_command",
]
