"""
Pydantic models describing the result of a pipeline run.
"""

from pathlib import Path

from pydantic import BaseModel, Field

from .enums import Stage

__all__ = [
    "PageResult",
    "PipelineOutcome",
]


class PageResult(BaseModel):
    """
    Result of partitioning a single page.

    Attributes:
        page_id (str): Identifier of the page.
        output_dir (Path): The page output directory.
        succeeded (bool): Whether the page output was fully built.
        screenshots (list[str]): Screenshot filenames copied for this page.
        configs (list[str]): Configuration filenames written for this page.
        error (str | None): Diagnostic message when the page failed.
    """

    page_id: str
    output_dir: Path
    succeeded: bool = True
    screenshots: list[str] = Field(default_factory=list)
    configs: list[str] = Field(default_factory=list)
    error: str | None = None


class PipelineOutcome(BaseModel):
    """
    Outcome of splitting one archive.

    Attributes:
        base_name (str): Name of the canonical root the archive was normalized to.
        succeeded (bool): Whether the request succeeded as a whole.
        stage (Stage | None): Stage that failed, if any.
        message (str | None): Diagnostic message for a failure.
        pages (list[PageResult]): Per-page results in discovery order.
        elapsed (float): Wall-clock duration of the run in seconds.
    """

    base_name: str
    succeeded: bool
    stage: Stage | None = None
    message: str | None = None
    pages: list[PageResult] = Field(default_factory=list)
    elapsed: float = 0.0

    @property
    def page_ids(self) -> list[str]:
        """
        Identifiers of every page that was processed.
        """
        return [page.page_id for page in self.pages]
