"""
Centralized logging configuration for the axtree logger hierarchy.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "axtree"

NOISY_LIBRARIES = [
    "markdown_it",
    "asyncio",
]


class NullHandler(logging.Handler):
    """Handler that discards all log records."""

    def emit(self, record):
        pass


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """
    Configure axtree logging for command-line use.

    Args:
        verbose: If True, log at DEBUG. If False, only warnings and errors.
        console: Rich console to log to (defaults to stderr)
    """
    for logger_name in NOISY_LIBRARIES:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.CRITICAL)
        logger.propagate = False
        logger.handlers = [NullHandler()]

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbose,
        show_path=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers = [handler]
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def silence_logging() -> None:
    """Discard all axtree log output."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers = [NullHandler()]
    package_logger.propagate = False
