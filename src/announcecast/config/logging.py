"""Logging setup for Announcecast."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
    level: str = "INFO",
) -> None:
    """Configure root logging.

    Console output goes through rich on stderr; ``log_file`` adds a plain
    text handler. Calling this again replaces the previous handlers.

    Args:
        verbose: Force DEBUG level
        log_file: Optional file to also write logs to
        level: Log level name used when not verbose
    """
    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
    ]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )

    # Keep third-party chatter down unless debugging
    if not verbose:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
