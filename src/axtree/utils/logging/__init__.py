"""
Logging configuration.
"""

from .logging_config import NullHandler, setup_logging, silence_logging

__all__ = ["NullHandler", "setup_logging", "silence_logging"]
