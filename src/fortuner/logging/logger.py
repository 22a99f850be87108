"""Logging setup for fortuner.

Diagnostics go to stderr through rich so they never mix with the fortunes
printed on stdout.  Engines log through ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = 'fortuner'


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stderr ``RichHandler`` to the package logger.

    Calling this again replaces the previous handler rather than adding a
    second one.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
