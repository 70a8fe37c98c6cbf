"""Logging setup — stdlib logging rendered on stderr by Rich."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(*, verbose: bool = False, debug: bool = False) -> None:
    """Route ``transdiff.*`` loggers to stderr.

    WARNING by default, INFO with *verbose*, DEBUG (with timestamps) with *debug*.
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=debug,
        show_path=debug,
        markup=False,
        rich_tracebacks=debug,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("transdiff")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
