"""
Utility modules organized by domain.

Submodules:
- logging: Logging configuration
"""

from .logging import setup_logging

__all__ = ["setup_logging"]
