"""
Enumerations used to configure the pipeline and label its outcomes.
"""

from enum import Enum

__all__ = [
    "Stage",
    "MatchMode",
    "FailurePolicy",
]


class Stage(str, Enum):
    """
    Pipeline stage an outcome or error originates from.

    Attributes:
        CLEAR: Removing the previous canonical root for the base name.
        NORMALIZE: Extracting the archive and collapsing wrapper folders.
        DISCOVER: Listing page documents under `view/`.
        PARTITION: Building a page output directory from shared assets.
        CONFIG: Splitting configuration documents for a page.
    """

    CLEAR = "clear"
    NORMALIZE = "normalize"
    DISCOVER = "discover"
    PARTITION = "partition"
    CONFIG = "config"


class MatchMode(str, Enum):
    """
    Rule deciding whether a screenshot belongs to a page.

    Attributes:
        SUBSTRING: The page identifier occurs anywhere in the filename.
            Identifiers contained in other identifiers over-match.
        DELIMITED: The page identifier occurs with no letter or digit
            directly before or after it.
    """

    SUBSTRING = "substring"
    DELIMITED = "delimited"


class FailurePolicy(str, Enum):
    """
    Handling of a page whose partitioning fails.

    Attributes:
        ISOLATE: Record the failure and keep processing the other pages.
        ABORT: Stop the request at the first failing page.
    """

    ISOLATE = "isolate"
    ABORT = "abort"
