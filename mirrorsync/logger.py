"""Logging setup for mirrorsync.

Library modules log through ``logging.getLogger(__name__)``; the CLI routes
those records to a Rich console.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "mirrorsync"


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """Attach a Rich handler to the mirrorsync logger.

    Args:
        verbose: Log debug messages instead of warnings and up
        console: Rich Console to render on (stderr by default)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    # Repeated CLI invocations in one process must not stack handlers
    logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
