"""Logging setup for the CLI — stdlib logging routed through rich."""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Generator, Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "DIFFTREE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def setup_logging(level: Optional[str] = None, console: Optional[Console] = None) -> None:
    """Configure the ``difftree`` logger hierarchy.

    Args:
        level: Log level override. If not provided, uses DIFFTREE_LOG_LEVEL or WARNING.
        console: Console the handler writes to (stderr by default).
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    log_level = getattr(logging, level_name, logging.WARNING)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=log_level == logging.DEBUG,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger = logging.getLogger("difftree")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(log_level)


@contextmanager
def log_timing(
    logger: logging.Logger, operation: str, level: int = logging.DEBUG
) -> Generator[None, None, None]:
    """Log how long the wrapped block took."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.log(level, "%s completed in %.1fms", operation, duration_ms)
