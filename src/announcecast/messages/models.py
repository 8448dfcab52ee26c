"""Outgoing chat message models."""

from dataclasses import dataclass

from pydantic import BaseModel


class OutgoingMessage(BaseModel):
    """A platform-neutral rich chat message."""

    title: str | None = None
    url: str | None = None
    description: str = ""
    author_name: str | None = None
    author_url: str | None = None
    author_icon_url: str | None = None
    image_url: str | None = None
    footer: str | None = None


@dataclass(frozen=True)
class Rendered:
    """A batch rendered into a message that fits the budget."""

    message: OutgoingMessage


@dataclass(frozen=True)
class Overflow:
    """A batch too large to render into a single message."""

    size: int
    limit: int


RenderResult = Rendered | Overflow
