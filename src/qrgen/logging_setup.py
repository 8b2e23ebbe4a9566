"""Logging configuration for the command line entry point."""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Send ``qrgen`` log records to stderr through :class:`RichHandler`.

    Only warnings are shown unless ``verbose`` is set, in which case debug
    output is enabled.  Calling this again replaces the previous handler.
    """

    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger("qrgen")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = ["LOG_FORMAT", "configure_logging"]
