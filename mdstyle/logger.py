"""Logging helpers for mdstyle.

The library only creates loggers; handlers are attached by the CLI through
`configure_logging` or by the embedding application.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "mdstyle"


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``mdstyle``.

    Args:
        name: Logger name, typically ``__name__``.

    Returns:
        logging.Logger: Standard library logger.

    Examples:
        get_logger("render").name  # "mdstyle.render"
    """
    if not (name == PACKAGE_LOGGER or name.startswith(f"{PACKAGE_LOGGER}.")):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a `rich` handler writing to stderr to the package logger.

    Calling this more than once only adjusts the level.

    Args:
        verbose: Log debug messages when True, warnings and above otherwise.

    Returns:
        logging.Logger: The package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(
            RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
        )
    return logger
