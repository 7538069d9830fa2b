"""Utility functions and classes for vidinfo."""

from .config import Config
from .logging import log_error, setup_logging

__all__ = ["Config", "log_error", "setup_logging"]
