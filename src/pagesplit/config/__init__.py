"""
Package 'config':
    Setting instances for loading configuration from environment variables.
"""

from .logging import LoggingSettings, logging_settings
from .pipeline import PipelineSettings, pipeline_settings

__all__ = [
    "LoggingSettings",
    "logging_settings",
    "PipelineSettings",
    "pipeline_settings",
]
