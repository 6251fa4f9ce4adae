"""Core utilities shared across ue-enabler packages."""

from .log import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
