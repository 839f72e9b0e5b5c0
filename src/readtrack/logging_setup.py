"""Logging setup for readtrack.

Modules log through ``logging.getLogger(__name__)``; ``setup_logging``
attaches one Rich handler to the package logger.
"""

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "readtrack"


def setup_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """Configure the package logger.

    Safe to call more than once; the handler is only added the first time
    and later calls just change the level.

    Args:
        level: Logging level as int or name

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
