"""Split long listings across several size-bounded messages."""

from collections.abc import Callable, Sequence
from typing import TypeVar

from announcecast.messages.models import OutgoingMessage, Overflow, RenderResult
from announcecast.utils.errors import RenderOverflowError

T = TypeVar("T")


def paginate(
    entries: Sequence[T],
    render: Callable[[list[T]], RenderResult],
) -> list[OutgoingMessage]:
    """Pack ``entries`` into as few messages as ``render`` allows.

    The batch grows one entry at a time. When ``render`` reports an
    overflow, the entry that caused it is held back, the batch built so
    far is emitted, and a new batch starts with the held-back entry.
    Order is preserved and no empty message is produced.

    Args:
        entries: Listing entries in display order
        render: Renders a batch or reports ``Overflow``

    Returns:
        Messages in listing order

    Raises:
        RenderOverflowError: If one entry alone does not fit in a message
    """
    messages: list[OutgoingMessage] = []
    batch: list[T] = []
    last_rendered: OutgoingMessage | None = None

    for entry in entries:
        result = render(batch + [entry])

        if isinstance(result, Overflow) and batch:
            # Emit what fit and start over with the entry that did not
            assert last_rendered is not None
            messages.append(last_rendered)
            batch = []
            result = render([entry])

        if isinstance(result, Overflow):
            raise RenderOverflowError(
                f"Single entry renders to {result.size} characters, limit is {result.limit}"
            )

        batch.append(entry)
        last_rendered = result.message

    if last_rendered is not None:
        messages.append(last_rendered)

    return messages
