"""Logging setup for the wpsync CLI and embedding applications.

Modules log through ``logging.getLogger(__name__)``; this only decides
where the ``wpsync`` logger tree writes to.

Example:
    >>> import logging
    >>> from wpsync.core.log import configure_logging
    >>> logger = configure_logging("DEBUG", "plain")
    >>> logger.level == logging.DEBUG
    True
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "wpsync"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO", fmt: str = "console") -> logging.Logger:
    """Attach a single handler to the ``wpsync`` logger.

    Args:
        level: Logging level name or number.
        fmt: ``console`` for rich output on stderr, ``plain`` for a
            timestamped single-line format.

    Returns:
        The configured ``wpsync`` logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler: logging.Handler
    if fmt == "console":
        handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
