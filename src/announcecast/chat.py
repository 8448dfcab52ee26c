"""Chat client interface and a terminal implementation."""

import logging
from typing import TYPE_CHECKING, Protocol

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from announcecast.messages.models import OutgoingMessage
from announcecast.utils.errors import ChannelSendError

if TYPE_CHECKING:
    from announcecast.commands.models import CommandEvent

logger = logging.getLogger(__name__)


class ChatClient(Protocol):
    """What Announcecast needs from a chat platform."""

    async def send(self, channel_id: str, message: OutgoingMessage) -> None:
        """Post ``message`` to a channel.

        Raises:
            ChannelSendError: If delivery fails
        """
        ...

    async def reply(self, event: "CommandEvent", message: OutgoingMessage) -> None:
        """Answer the command that produced ``event``."""
        ...


class ConsoleChatClient:
    """Renders messages to the terminal with rich.

    Used by the CLI so every command can be exercised without a chat
    platform. Channels listed in ``unreachable`` fail like a channel the
    bot lost access to.
    """

    def __init__(self, console: Console | None = None, unreachable: set[str] | None = None) -> None:
        self.console = console or Console()
        self.unreachable = unreachable or set()

    async def send(self, channel_id: str, message: OutgoingMessage) -> None:
        if channel_id in self.unreachable:
            raise ChannelSendError(channel_id, f"Channel '{channel_id}' is not reachable")
        self.console.print(render_panel(message, subtitle=f"#{channel_id}"))
        logger.debug("Printed message to #%s", channel_id)

    async def reply(self, event: "CommandEvent", message: OutgoingMessage) -> None:
        self.console.print(render_panel(message, subtitle=f"reply in #{event.channel_id}"))


def render_panel(message: OutgoingMessage, subtitle: str | None = None) -> Panel:
    """Draw a message the way a chat embed would look."""
    parts = []
    if message.author_name:
        parts.append(f"*{message.author_name}*")
    if message.description:
        parts.append(message.description)
    if message.url:
        parts.append(message.url)
    if message.footer:
        parts.append(f"_{message.footer}_")

    return Panel(
        Markdown("\n\n".join(parts)),
        title=f"[bold]{message.title}[/bold]" if message.title else None,
        subtitle=subtitle,
        title_align="left",
        border_style="cyan",
    )
