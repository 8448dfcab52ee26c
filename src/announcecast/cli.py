"""CLI entry point for Announcecast."""

import asyncio
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from announcecast import __version__
from announcecast.bot import Bot, PollSummary, create_bot
from announcecast.chat import ConsoleChatClient
from announcecast.commands.models import Command, CommandEvent, parse_command
from announcecast.config.logging import setup_logging
from announcecast.config.manager import ConfigManager
from announcecast.utils.errors import AnnouncecastError

app = typer.Typer(
    name="announcecast",
    help="Announce new podcast episodes to chat channels",
    no_args_is_help=True,
)
console = Console()

CHANNEL_OPTION = typer.Option("console", "--channel", "-c", help="Channel the command is issued in")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file"
    ),
) -> None:
    """Announcecast - follow podcasts and announce their new episodes."""
    setup_logging(verbose=verbose, log_file=log_file)


@app.command("version")
def show_version() -> None:
    """Show version information."""
    console.print(f"[bold cyan]Announcecast[/bold cyan] v{__version__}")


@app.command("search")
def search(
    keywords: str = typer.Argument(..., help="Podcast title keywords"),
    channel: str = CHANNEL_OPTION,
) -> None:
    """Search for podcasts by title.

    Examples:
        announcecast search "hardcore history"
    """
    _run_command(channel, parse_command("search", {"keywords": keywords}))


@app.command("follow")
def follow(
    keywords: str = typer.Argument(..., help="Keywords matching exactly one podcast"),
    channel: str = CHANNEL_OPTION,
) -> None:
    """Follow the podcast matching the keywords."""
    _run_command(channel, parse_command("follow", {"keywords": keywords}))


@app.command("follow-rss")
def follow_rss(
    feed: str = typer.Argument(..., help="RSS feed URL"),
    channel: str = CHANNEL_OPTION,
) -> None:
    """Follow a podcast by its RSS feed URL.

    Examples:
        announcecast follow-rss https://example.com/feed.xml --channel news
    """
    _run_command(channel, parse_command("follow-rss", {"feed": feed}))


@app.command("unfollow")
def unfollow(
    feed_id: str = typer.Argument(..., help="Feed id shown by 'following'"),
    channel: str = CHANNEL_OPTION,
) -> None:
    """Stop following a podcast in a channel."""
    _run_command(channel, parse_command("unfollow", {"id": feed_id}))


@app.command("following")
def following(channel: str = CHANNEL_OPTION) -> None:
    """List the podcasts a channel follows."""
    _run_command(channel, parse_command("following"))


@app.command("help")
def show_help(channel: str = CHANNEL_OPTION) -> None:
    """Show the chat command help message."""
    _run_command(channel, parse_command("help"))


@app.command("poll")
def poll() -> None:
    """Check every followed feed once and announce new episodes."""
    bot = _load_bot()
    summary = asyncio.run(bot.poll())
    _print_poll_summary(summary)


def _load_bot() -> Bot:
    try:
        manager = ConfigManager()
        config = manager.load_config()
        if not logging.getLogger().isEnabledFor(logging.DEBUG):
            logging.getLogger().setLevel(config.log_level)
        return create_bot(config, ConsoleChatClient(console), manager.get_store_file(config))
    except AnnouncecastError as e:
        console.print(f"[red]✗[/red] Error: {escape(str(e))}")
        sys.exit(1)


def _run_command(channel: str, command: Command) -> None:
    bot = _load_bot()
    event = CommandEvent(channel_id=channel, command=command)

    async def run() -> None:
        bot.receive_command(event)
        await bot.drain()

    asyncio.run(run())


def _print_poll_summary(summary: PollSummary) -> None:
    if not summary.checked:
        console.print("[yellow]No feeds followed yet.[/yellow]")
        console.print("\nFollow one: [cyan]announcecast follow-rss <url>[/cyan]")
        return

    table = Table(title="[bold]Poll results[/bold]")
    table.add_column("Feed", style="blue")
    table.add_column("Sent", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")

    for result in summary.dispatched:
        table.add_row(result.feed_url, str(len(result.sent)), str(len(result.failed)))

    if summary.dispatched:
        console.print(table)
    console.print(
        f"\n[dim]Checked {summary.checked} feed(s), "
        f"{len(summary.dispatched)} with new episodes, "
        f"{len(summary.unreadable)} unreadable[/dim]"
    )


if __name__ == "__main__":
    app()
