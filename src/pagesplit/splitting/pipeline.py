"""
Coordinator turning one uploaded archive into per-page output directories.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from pagesplit.config import PipelineSettings, pipeline_settings
from pagesplit.schema import (
    ConfigTarget,
    FailurePolicy,
    MatchMode,
    PageDocument,
    PageResult,
    PipelineOutcome,
    Stage,
)
from pagesplit.utils import Timer, get_logger

from .archive import normalize_archive, remove_tree
from .assets import partition_page
from .configs import CONFIG_DOCUMENTS, split_configs
from .discovery import discover_pages
from .exceptions import PageSplitError, PartitionError, PipelineIOError
from .registry import archive_base_name

__all__ = ["PageSplitter", "split_archive"]


class PageSplitter:
    """
    Split a bundle archive into self-contained page packages.

    Attributes:
        archive_path (Path): The uploaded archive.
        base_name (str): Name of the canonical root under `processed_dir`.
        processed_dir (Path): Parent directory of canonical roots.
        output_dir (Path): Parent directory of page output directories.
        match_mode (MatchMode): Screenshot matching rule.
        failure_policy (FailurePolicy): Handling of a failing page.
        max_workers (int): Number of pages processed concurrently.
    """

    def __init__(
        self,
        *,
        archive_path: Path,
        base_name: str,
        processed_dir: Path,
        output_dir: Path | None = None,
        match_mode: MatchMode = MatchMode.SUBSTRING,
        failure_policy: FailurePolicy = FailurePolicy.ISOLATE,
        max_workers: int = 1,
        page_suffix: str = ".html",
        scratch_dir: Path | None = None,
        config_documents: tuple[ConfigTarget, ...] = CONFIG_DOCUMENTS,
    ) -> None:
        """
        Args:
            archive_path (Path): The uploaded archive.
            base_name (str): Name of the canonical root, usually the archive
                filename without its extension.
            processed_dir (Path): Parent directory of canonical roots.
            output_dir (Path | None): Parent directory of page outputs.
                Defaults to `processed_dir`.
            match_mode (MatchMode): Screenshot matching rule.
            failure_policy (FailurePolicy): Handling of a failing page.
            max_workers (int): Number of pages processed concurrently.
            page_suffix (str): Filename suffix of page documents.
            scratch_dir (Path | None): Where extraction scratch directories are
                created. Defaults to the system temporary directory.
            config_documents (tuple[ConfigTarget, ...]): Configuration
                documents split into every page.
        """
        if not base_name or base_name in {".", ".."} or Path(base_name).name != base_name:
            raise ValueError(f"Invalid base name: {base_name!r}")
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        self.archive_path: Path = Path(archive_path)
        self.base_name: str = base_name
        self.processed_dir: Path = Path(processed_dir)
        self.output_dir: Path = Path(output_dir) if output_dir is not None else self.processed_dir
        self.match_mode: MatchMode = match_mode
        self.failure_policy: FailurePolicy = failure_policy
        self.max_workers: int = max_workers
        self.page_suffix: str = page_suffix
        self.scratch_dir: Path | None = scratch_dir
        self.config_documents: tuple[ConfigTarget, ...] = config_documents

        self._results: list[PageResult] = []

        self.logger = get_logger("pipeline")

    @property
    def canonical_root(self) -> Path:
        """
        Directory the archive is normalized to.
        """
        return self.processed_dir / self.base_name

    def run(self) -> PipelineOutcome:
        """
        Run the full splitting pipeline.

        1. Remove the previous canonical root of this base name.
        2. Extract and normalize the archive to `canonical_root`.
        3. Discover the page documents under `view/`.
        4. For every page, build its output directory, then split the
           configuration documents into it.

        Returns:
            PipelineOutcome: Success, or the failing stage and a message.
        """
        self.logger.info("Starting split of %s as %s", self.archive_path, self.base_name)
        self._results = []

        with Timer() as timer:
            try:
                self._clear()
                self._normalize()
                pages = self._discover()
                self.logger.info(
                    "Discovered %d pages in %s", len(pages), self.canonical_root
                )
                self._partition_all(pages)
                outcome = self._summarize()
            except PageSplitError as e:
                self.logger.error(
                    "Split of %s failed at stage %s: %s",
                    self.base_name,
                    e.stage.value,
                    e,
                )
                outcome = PipelineOutcome(
                    base_name=self.base_name,
                    succeeded=False,
                    stage=e.stage,
                    message=str(e),
                    pages=list(self._results),
                )

        outcome.elapsed = timer.elapsed
        self.logger.info(
            "Finished split of %s in %.2fs (succeeded=%s, pages=%d)",
            self.base_name,
            outcome.elapsed,
            outcome.succeeded,
            len(outcome.pages),
        )
        return outcome

    def _clear(self) -> None:
        try:
            remove_tree(self.canonical_root)
        except PipelineIOError as e:
            e.stage = Stage.CLEAR
            raise

    def _normalize(self) -> None:
        normalize_archive(
            self.archive_path, self.canonical_root, scratch_parent=self.scratch_dir
        )

    def _discover(self) -> list[PageDocument]:
        try:
            return list(discover_pages(self.canonical_root, suffix=self.page_suffix))
        except OSError as e:
            raise PipelineIOError(
                f"Cannot list pages in {self.canonical_root}: {e}", stage=Stage.DISCOVER
            )

    def _process_page(self, page: PageDocument) -> PageResult:
        """
        Build the output directory of one page and split its configuration.
        """
        result = partition_page(
            page,
            self.canonical_root,
            self.output_dir,
            match_mode=self.match_mode,
        )
        try:
            result.configs = split_configs(
                self.canonical_root, page.page_id, result.output_dir, self.config_documents
            )
        except OSError as e:
            raise PartitionError(
                page.page_id, f"writing configuration failed: {e}", stage=Stage.CONFIG
            )
        self.logger.info(
            "Page %s: %d screenshots, configs=%s",
            page.page_id,
            len(result.screenshots),
            result.configs,
        )
        return result

    def _record_failure(self, page: PageDocument, error: PartitionError) -> None:
        self.logger.error("Partitioning failed: %s", error)
        self._results.append(
            PageResult(
                page_id=page.page_id,
                output_dir=self.output_dir / page.page_id,
                succeeded=False,
                error=str(error),
            )
        )

    def _partition_all(self, pages: list[PageDocument]) -> None:
        """
        Process every page, sequentially or on a thread pool.

        Results are recorded in discovery order. Under `FailurePolicy.ABORT`
        the first failure is re-raised once running workers have finished.
        """
        abort = self.failure_policy is FailurePolicy.ABORT

        if self.max_workers == 1:
            for page in pages:
                try:
                    self._results.append(self._process_page(page))
                except PartitionError as e:
                    self._record_failure(page, e)
                    if abort:
                        raise
            return

        first_error: PartitionError | None = None
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [(page, executor.submit(self._process_page, page)) for page in pages]
            for page, future in futures:
                if future.cancelled():
                    continue
                try:
                    self._results.append(future.result())
                except PartitionError as e:
                    self._record_failure(page, e)
                    if abort and first_error is None:
                        first_error = e
                        for _, pending in futures:
                            pending.cancel()
        if first_error is not None:
            raise first_error

    def _summarize(self) -> PipelineOutcome:
        failed = [result.page_id for result in self._results if not result.succeeded]
        if failed:
            return PipelineOutcome(
                base_name=self.base_name,
                succeeded=False,
                stage=Stage.PARTITION,
                message=f"{len(failed)} page(s) failed: {', '.join(failed)}",
                pages=list(self._results),
            )
        return PipelineOutcome(
            base_name=self.base_name, succeeded=True, pages=list(self._results)
        )


def split_archive(
    archive_path: Path,
    base_name: str | None = None,
    *,
    settings: PipelineSettings | None = None,
) -> PipelineOutcome:
    """
    Split an archive using the configured directories and policies.

    Args:
        archive_path (Path): The archive to split.
        base_name (str | None): Canonical root name. Derived from the archive
            filename when None.
        settings (PipelineSettings | None): Overrides the global settings.

    Returns:
        PipelineOutcome: The result of `PageSplitter.run`.
    """
    settings = settings or pipeline_settings
    archive_path = Path(archive_path)
    splitter = PageSplitter(
        archive_path=archive_path,
        base_name=base_name or archive_base_name(archive_path.name),
        processed_dir=settings.processed_dir,
        output_dir=settings.output_root,
        match_mode=settings.match_mode,
        failure_policy=settings.failure_policy,
        max_workers=settings.max_workers,
        page_suffix=settings.page_suffix,
        scratch_dir=settings.upload_dir,
    )
    return splitter.run()
