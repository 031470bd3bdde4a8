"""
Extract an uploaded archive and normalize it to a canonical root.

Archiving a folder often wraps its content in a directory named after the
folder, and some tools wrap it twice (`bundle/bundle/...`). The normalizer
strips those wrappers so that `view/` and `assets/` sit directly below the
canonical root.
"""

import shutil
import tempfile
from pathlib import Path

from pagesplit.utils import get_logger

from .exceptions import ExtractionError, PipelineIOError
from .registry import get_extractor

__all__ = ["choose_root", "normalize_archive", "remove_tree"]

logger = get_logger("pipeline")


def remove_tree(path: Path) -> None:
    """
    Remove a file or directory tree if it exists.

    Raises:
        PipelineIOError: If something exists at `path` but cannot be removed.
    """
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path.exists() or path.is_symlink():
            path.unlink()
    except OSError as e:
        raise PipelineIOError(f"Cannot remove '{path}': {e}")


def choose_root(extracted_dir: Path) -> Path:
    """
    Pick the directory holding the real content of an extracted archive.

    A single top-level directory `X` is descended into. If `X` itself holds
    exactly one entry also named `X`, that doubly nested directory is used.
    Any other layout (no entries, several entries, a single file) keeps
    `extracted_dir` as the root.

    Args:
        extracted_dir (Path): Directory the archive was extracted into.

    Returns:
        Path: The canonical root inside `extracted_dir`.
    """
    entries = list(extracted_dir.iterdir())
    if len(entries) != 1 or not entries[0].is_dir():
        return extracted_dir

    wrapper = entries[0]
    inner = list(wrapper.iterdir())
    if len(inner) == 1 and inner[0].name == wrapper.name:
        return inner[0]
    return wrapper


def normalize_archive(
    archive_path: Path, target: Path, *, scratch_parent: Path | None = None
) -> Path:
    """
    Extract `archive_path` and move its canonical root to `target`.

    The archive is extracted into a uniquely named scratch directory, which
    is discarded afterwards whether or not normalization succeeded. Anything
    already at `target` is replaced.

    Args:
        archive_path (Path): The archive to extract.
        target (Path): Final location of the canonical root.
        scratch_parent (Path | None): Where to create the scratch directory.
            Defaults to the system temporary directory.

    Returns:
        Path: `target`.

    Raises:
        ExtractionError: If the archive is missing, unsupported or corrupt.
        PipelineIOError: If `target` cannot be replaced.
    """
    if not archive_path.is_file():
        raise ExtractionError(f"Archive not found: {archive_path}")

    extractor = get_extractor(archive_path)

    try:
        if scratch_parent is not None:
            scratch_parent.mkdir(parents=True, exist_ok=True)
        scratch = Path(tempfile.mkdtemp(prefix=".extract-", dir=scratch_parent))
    except OSError as e:
        raise PipelineIOError(f"Cannot create scratch directory: {e}")

    try:
        extracted = scratch / "content"
        extracted.mkdir()
        logger.info("Extracting %s into %s", archive_path, scratch)
        extractor.extract(archive_path, extracted)

        root = choose_root(extracted)
        logger.debug(
            "Canonical root of %s is %s", archive_path.name, root.relative_to(scratch)
        )

        remove_tree(target)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(root), str(target))
        except OSError as e:
            raise PipelineIOError(f"Cannot move extracted content to '{target}': {e}")
    finally:
        shutil.rmtree(scratch, ignore_errors=True)

    logger.info("Normalized %s to %s", archive_path.name, target)
    return target
