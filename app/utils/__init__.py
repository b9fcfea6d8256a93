"""Utility functions for the deploy gateway."""

from app.utils.logging import configure_logging, get_logger
from app.utils.urls import with_scheme

__all__ = [
    "configure_logging",
    "get_logger",
    "with_scheme",
]
