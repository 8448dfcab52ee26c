"""Outgoing message rendering and pagination."""

from announcecast.messages.factory import MessageFactory
from announcecast.messages.models import OutgoingMessage, Overflow, Rendered, RenderResult
from announcecast.messages.paginator import paginate

__all__ = [
    "MessageFactory",
    "OutgoingMessage",
    "Rendered",
    "Overflow",
    "RenderResult",
    "paginate",
]
