"""Text helpers for chat message bodies."""

import re

from bs4 import BeautifulSoup, Comment

BLOCK_TAGS = ["p", "div", "li", "h1", "h2", "h3", "h4", "h5", "h6", "tr"]
_SPACES = re.compile(r"[ \t\r\f\v]+")


def html_to_text(value: str) -> str:
    """Convert an HTML fragment to plain text, keeping line breaks.

    Args:
        value: HTML (or plain) text from a feed

    Returns:
        Text with tags stripped and entities decoded
    """
    soup = BeautifulSoup(value, "html.parser")

    for element in soup(["script", "style"]):
        element.decompose()
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(BLOCK_TAGS):
        block.append("\n")

    text = soup.get_text()
    lines = [_SPACES.sub(" ", line).strip() for line in text.split("\n")]
    return "\n".join(line for line in lines if line)


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """Truncate text to ``max_length`` characters including the suffix."""
    if len(text) <= max_length:
        return text
    if max_length <= len(suffix):
        return text[:max_length]
    return text[: max_length - len(suffix)].rstrip() + suffix


def compress_description(value: str, max_length: int = 1024) -> str:
    """Reduce an episode description to its first line of plain text."""
    text = html_to_text(value or "")
    first_line = text.split("\n", 1)[0]
    return truncate_text(first_line, max_length)


def format_duration(total_seconds: int | None) -> str:
    """Format seconds as ``1h 2m 3s``, ``2m 3s`` or ``3s``.

    Returns an empty string for missing or non-positive durations.
    """
    if not total_seconds or total_seconds <= 0:
        return ""

    hours, remainder = divmod(int(total_seconds), 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def parse_duration(value: str | int | None) -> int | None:
    """Parse an itunes:duration value (``HH:MM:SS``, ``MM:SS`` or seconds)."""
    if value is None:
        return None
    if isinstance(value, int):
        return value

    value = value.strip()
    if not value:
        return None

    try:
        parts = [int(float(part)) for part in value.split(":")]
    except ValueError:
        return None

    seconds = 0
    for part in parts:
        seconds = seconds * 60 + part
    return seconds
