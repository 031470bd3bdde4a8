"""
Exceptions raised while splitting an archive into page packages.
"""

from pagesplit.schema import Stage

__all__ = [
    "PageSplitError",
    "ExtractionError",
    "PipelineIOError",
    "PartitionError",
    "ParseError",
    "StructuralMismatch",
]


class PageSplitError(Exception):
    """
    Base class for all pipeline errors.

    Attributes:
        stage (Stage): Stage the error originates from.
    """

    stage: Stage = Stage.NORMALIZE

    def __init__(self, message: str, *, stage: Stage | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class ExtractionError(PageSplitError):
    """
    The archive is missing, unreadable, corrupt or of an unsupported format.
    """


class PipelineIOError(PageSplitError):
    """
    A filesystem operation failed (permissions, missing path, disk full).
    """


class PartitionError(PipelineIOError):
    """
    Building the output directory of a single page failed.
    """

    stage = Stage.PARTITION

    def __init__(self, page_id: str, message: str, *, stage: Stage | None = None) -> None:
        super().__init__(f"Page '{page_id}': {message}", stage=stage)
        self.page_id = page_id


class ParseError(PageSplitError):
    """
    A configuration document is not valid JSON.
    """

    stage = Stage.CONFIG


class StructuralMismatch(PageSplitError):
    """
    A configuration document is valid JSON but lacks a `pages` list.
    """

    stage = Stage.CONFIG
