"""Logging setup for the aisk package."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from aisk.config.logging_config import LoggingConfig

LOGGER_NAME = "aisk"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Configure the ``aisk`` logger.

    Replaces handlers installed by a previous call, so it is safe to call
    more than once.

    Args:
        config: Logging settings. Uses defaults if ``None``.

    Returns:
        The configured package logger.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler: logging.Handler
    if config.rich:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=config.show_path,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))

    logger.addHandler(handler)
    logger.propagate = False
    return logger
