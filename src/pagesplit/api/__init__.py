"""
Package 'api': HTTP shell around the splitting pipeline.
"""

from .main import app

__all__ = ["app"]
