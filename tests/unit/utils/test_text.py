"""Tests for text helpers."""

from announcecast.utils.text import (
    compress_description,
    format_duration,
    html_to_text,
    parse_duration,
    truncate_text,
)


class TestHtmlToText:
    """Tests for html_to_text."""

    def test_strips_tags_and_decodes_entities(self):
        assert html_to_text("<p>Fish &amp; <b>chips</b></p>") == "Fish & chips"

    def test_block_tags_become_line_breaks(self):
        assert html_to_text("<p>One</p><p>Two</p>") == "One\nTwo"
        assert html_to_text("One<br/>Two") == "One\nTwo"

    def test_plain_text_unchanged(self):
        assert html_to_text("Just words") == "Just words"

    def test_comments_are_dropped(self):
        assert html_to_text("<!-- a > b -->Real text") == "Real text"

    def test_script_and_style_are_dropped(self):
        value = "<style>p {color: red}</style><script>alert(1)</script><p>Hello</p>"
        assert html_to_text(value) == "Hello"


class TestTruncateText:
    """Tests for truncate_text."""

    def test_short_text_unchanged(self):
        assert truncate_text("hello", 10) == "hello"

    def test_long_text_truncated_with_suffix(self):
        result = truncate_text("a" * 20, 10)
        assert result == "a" * 7 + "..."
        assert len(result) == 10

    def test_tiny_limit(self):
        assert truncate_text("abcdef", 2) == "ab"


class TestCompressDescription:
    """Tests for compress_description."""

    def test_keeps_first_line_only(self):
        value = "<p>First paragraph.</p><p>Second paragraph.</p>"
        assert compress_description(value) == "First paragraph."

    def test_ignores_stylesheet(self):
        assert compress_description("<style>p {color: red}</style><p>Hello</p>") == "Hello"

    def test_respects_limit(self):
        result = compress_description("x" * 2000)
        assert len(result) == 1024
        assert result.endswith("...")

    def test_empty_description(self):
        assert compress_description("") == ""
        assert compress_description(None) == ""


class TestFormatDuration:
    """Tests for format_duration."""

    def test_hours_minutes_seconds(self):
        assert format_duration(3723) == "1h 2m 3s"

    def test_minutes_seconds(self):
        assert format_duration(123) == "2m 3s"

    def test_seconds_only(self):
        assert format_duration(3) == "3s"

    def test_missing_duration(self):
        assert format_duration(None) == ""
        assert format_duration(0) == ""


class TestParseDuration:
    """Tests for parse_duration."""

    def test_clock_formats(self):
        assert parse_duration("01:02:03") == 3723
        assert parse_duration("02:03") == 123

    def test_plain_seconds(self):
        assert parse_duration("3600") == 3600
        assert parse_duration(90) == 90

    def test_invalid_values(self):
        assert parse_duration(None) is None
        assert parse_duration("") is None
        assert parse_duration("about an hour") is None
