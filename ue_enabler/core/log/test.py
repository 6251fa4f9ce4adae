"""Tests for core logging module."""

import logging
from io import StringIO

import pytest

from .lib import LOG_FORMAT, get_logger, setup_logging


class TestLogging:
    """Test core logging API."""

    @pytest.mark.unit
    def test_get_logger(self) -> None:
        """Verify logger instance creation."""
        logger = get_logger("analyzer")
        assert logger.name == "analyzer"
        assert isinstance(logger, logging.Logger)

    @pytest.mark.unit
    def test_get_logger_default_name(self) -> None:
        """Verify default logger name."""
        logger = get_logger()
        assert logger.name == "ue-enabler"

    @pytest.mark.unit
    def test_setup_logging(self) -> None:
        """Setup accepts a level and stream without raising."""
        stream = StringIO()
        setup_logging(level=logging.DEBUG, stream=stream)
        logger = get_logger("test_setup")
        logger.debug("test message")

        # basicConfig is a no-op once the root logger has handlers,
        # so only the API contract is checked here.
        assert logger.level == logging.NOTSET

    @pytest.mark.unit
    def test_log_format_fields(self) -> None:
        """Format includes timestamp, logger name and level."""
        assert "%(name)s" in LOG_FORMAT
        assert "%(levelname)s" in LOG_FORMAT
