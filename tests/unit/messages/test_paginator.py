"""Tests for listing pagination."""

import pytest

from announcecast.messages.models import OutgoingMessage, Overflow, Rendered
from announcecast.messages.paginator import paginate
from announcecast.utils.errors import RenderOverflowError


def make_render(limit: int):
    """Renderer that joins entries with newlines and overflows past ``limit``."""

    def render(batch: list[str]):
        description = "\n".join(batch)
        if len(description) > limit:
            return Overflow(size=len(description), limit=limit)
        return Rendered(OutgoingMessage(description=description))

    return render


class TestPaginate:
    """Tests for paginate."""

    def test_everything_fits_in_one_message(self):
        messages = paginate(["a", "b", "c"], make_render(100))

        assert [m.description for m in messages] == ["a\nb\nc"]

    def test_splits_preserving_order(self):
        """Concatenated pages reproduce the listing in order."""
        entries = [f"entry-{i}" for i in range(10)]

        messages = paginate(entries, make_render(25))

        assert len(messages) > 1
        flattened = [line for m in messages for line in m.description.split("\n")]
        assert flattened == entries

    def test_every_page_respects_limit(self):
        entries = [f"entry-{i}" for i in range(10)]

        messages = paginate(entries, make_render(25))

        assert all(len(m.description) <= 25 for m in messages)

    def test_pages_are_maximal(self):
        """A page is only cut when the next entry would not fit."""
        messages = paginate(["aaaa", "bbbb", "cccc"], make_render(9))

        assert [m.description for m in messages] == ["aaaa\nbbbb", "cccc"]

    def test_empty_listing_produces_no_messages(self):
        assert paginate([], make_render(10)) == []

    def test_no_empty_messages(self):
        messages = paginate(["x" * 10, "y" * 10, "z" * 10], make_render(10))

        assert [m.description for m in messages] == ["x" * 10, "y" * 10, "z" * 10]

    def test_single_oversized_entry_raises(self):
        with pytest.raises(RenderOverflowError):
            paginate(["ok", "x" * 50], make_render(10))

    def test_render_gets_fresh_batches(self):
        """Batches handed to render are never mutated afterwards."""
        seen = []

        def render(batch):
            seen.append(batch)
            return Rendered(OutgoingMessage(description="\n".join(batch)))

        paginate(["a", "b", "c"], render)

        assert seen == [["a"], ["a", "b"], ["a", "b", "c"]]
