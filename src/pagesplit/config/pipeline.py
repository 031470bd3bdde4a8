"""
Defines and loads the splitting pipeline configuration.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pagesplit.schema.enums import FailurePolicy, MatchMode


class PipelineSettings(BaseSettings):
    """
    Pipeline settings loaded from environment variables and .env.

    Attributes:
        upload_dir (Path): Where uploaded archives are persisted before splitting.
        processed_dir (Path): Parent of every canonical root (`<processed_dir>/<base>`).
        output_dir (Path | None): Parent of the page output directories.
            Falls back to `processed_dir` when unset.
        match_mode (MatchMode): How screenshot filenames are matched to pages.
        failure_policy (FailurePolicy): Whether one failing page aborts the request.
        max_workers (int): Number of pages partitioned concurrently.
        page_suffix (str): Filename suffix of page documents under `view/`.
        keep_uploads (bool): Keep uploaded archives after the request ends.
    """

    upload_dir: Path = Field(
        default=Path("uploads"), description="Directory for uploaded archives."
    )
    processed_dir: Path = Field(
        default=Path("processed"), description="Directory holding canonical roots."
    )
    output_dir: Path | None = Field(
        default=None, description="Directory holding page outputs (processed_dir if None)."
    )
    match_mode: MatchMode = Field(
        default=MatchMode.SUBSTRING, description="Screenshot matching rule."
    )
    failure_policy: FailurePolicy = Field(
        default=FailurePolicy.ISOLATE, description="Per-page failure handling."
    )
    max_workers: int = Field(
        default=1, ge=1, description="Pages partitioned concurrently."
    )
    page_suffix: str = Field(default=".html", description="Page document suffix.")
    keep_uploads: bool = Field(
        default=False, description="Keep uploaded archives after processing."
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGESPLIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def output_root(self) -> Path:
        """
        Directory under which page output directories are created.
        """
        return self.output_dir if self.output_dir is not None else self.processed_dir

    def ensure_directories(self) -> None:
        """
        Create the upload, processed and output directories if missing.
        """
        for directory in (self.upload_dir, self.processed_dir, self.output_root):
            directory.mkdir(parents=True, exist_ok=True)


# instantiate once, to be imported by other modules
pipeline_settings = PipelineSettings()
