"""Core logging implementation for ue-enabler."""

import logging
import sys
from typing import Optional

__all__ = ["get_logger", "setup_logging"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, stream=sys.stderr) -> None:
    """Configure basic logging.

    Logs go to stderr by default so STDIO transports keep stdout clean
    for protocol traffic.

    Args:
        level: Logging level.
        stream: Output stream.
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=stream,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name of the logger.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name or "ue-enabler")
