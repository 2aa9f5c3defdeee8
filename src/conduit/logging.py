"""Logging setup for the conduit client.

Pages log failed requests at ERROR and messages they had to drop (stale
results, events for a state they are not in) at DEBUG. httpx logs every
request at INFO, so its loggers stay at WARNING unless requests are traced.
"""

import logging
import sys
from collections.abc import Iterable
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

# HTTP client loggers, only shown when tracing (-vv)
HTTP_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    stream: TextIO = sys.stderr,
) -> Console:
    """Install a rich handler on the root logger.

    Args:
        verbosity: Number of -v flags (1 shows dropped messages, 2 also traces requests)
        quiet: Only warnings and errors; wins over verbosity
        no_color: Disable colored output
        stream: Output stream for logs

    Returns:
        The console the handler writes to
    """
    tracing = verbosity >= 2 and not quiet
    if quiet:
        level = logging.WARNING
    elif verbosity >= 1:
        level = logging.DEBUG
    else:
        level = logging.INFO

    console = Console(file=stream, force_terminal=not no_color, no_color=no_color)
    handler = RichHandler(console=console, show_time=tracing, show_path=tracing)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)

    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if tracing else logging.WARNING)

    return console


def log_errors(logger: logging.Logger, errors: Iterable[str]) -> None:
    """Log every server-reported error message at ERROR level."""
    for error in errors:
        logger.error(error)
