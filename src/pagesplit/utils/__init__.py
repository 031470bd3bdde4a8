"""
Package utils: re-export all utility functions for easy import.
"""

from .logger import get_logger
from .timer import Timer

__all__ = ["get_logger", "Timer"]
