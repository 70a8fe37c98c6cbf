"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from transdiff.log import setup_logging


class TestSetupLogging:
    def test_levels(self):
        setup_logging()
        assert logging.getLogger("transdiff").level == logging.WARNING
        setup_logging(verbose=True)
        assert logging.getLogger("transdiff").level == logging.INFO
        setup_logging(verbose=True, debug=True)
        assert logging.getLogger("transdiff").level == logging.DEBUG

    def test_single_rich_handler(self):
        setup_logging()
        setup_logging()
        logger = logging.getLogger("transdiff")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.propagate is False
