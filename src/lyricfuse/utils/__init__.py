"""Utility modules."""

from .logging import setup_logging, get_logger
from .retry import retry_call

__all__ = [
    "setup_logging",
    "get_logger",
    "retry_call",
]
