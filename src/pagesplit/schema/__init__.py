"""
Package: 'schema'
"""

from .enums import Stage, MatchMode, FailurePolicy
from .documents import PageDocument, ConfigDocument, ConfigTarget
from .outcome import PageResult, PipelineOutcome

__all__ = [
    # enums
    "Stage",
    "MatchMode",
    "FailurePolicy",
    # inputs
    "PageDocument",
    "ConfigDocument",
    "ConfigTarget",
    # outcomes
    "PageResult",
    "PipelineOutcome",
]
