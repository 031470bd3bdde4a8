"""
Build the self-contained output directory of a single page.

Layout of a page output directory:

    <id>/view/<id>.html
    <id>/assets/**                 shared assets without any `screenshots` folder
    <id>/assets/screenshots/*      only the screenshots matching <id>
"""

import re
import shutil
from pathlib import Path

from pagesplit.schema import MatchMode, PageDocument, PageResult
from pagesplit.utils import get_logger

from .archive import remove_tree
from .discovery import VIEW_DIRNAME
from .exceptions import PartitionError, PipelineIOError

__all__ = [
    "ASSETS_DIRNAME",
    "SCREENSHOTS_DIRNAME",
    "screenshot_matches",
    "partition_page",
]

ASSETS_DIRNAME = "assets"
SCREENSHOTS_DIRNAME = "screenshots"

logger = get_logger("pipeline")


def screenshot_matches(
    filename: str, page_id: str, mode: MatchMode = MatchMode.SUBSTRING
) -> bool:
    """
    Decide whether a screenshot belongs to a page.

    With `MatchMode.SUBSTRING` the identifier may occur anywhere in the
    filename, so "home" also claims "home2_shot.png". `MatchMode.DELIMITED`
    requires the identifier not to touch a letter or digit on either side.
    Both modes are case-sensitive.
    """
    if mode is MatchMode.DELIMITED:
        pattern = rf"(?<![A-Za-z0-9]){re.escape(page_id)}(?![A-Za-z0-9])"
        return re.search(pattern, filename) is not None
    return page_id in filename


def _ignore_named(excluded: str):
    def ignore(directory: str, names: list[str]) -> list[str]:
        return [name for name in names if name == excluded]

    return ignore


def _contains(parent: Path, child: Path) -> bool:
    parent, child = parent.resolve(), child.resolve()
    return parent == child or parent in child.parents


def partition_page(
    page: PageDocument,
    canonical_root: Path,
    dest_root: Path,
    *,
    match_mode: MatchMode = MatchMode.SUBSTRING,
    screenshots_dirname: str = SCREENSHOTS_DIRNAME,
) -> PageResult:
    """
    Create `<dest_root>/<page_id>/` holding the page document and its assets.

    Any previous output of the same page is removed first. When the canonical
    root has no `assets/` folder only the document is copied; otherwise the
    page always receives an (possibly empty) `assets/screenshots/` folder.

    Args:
        page (PageDocument): The page to partition.
        canonical_root (Path): The normalized archive root (read only).
        dest_root (Path): Parent of all page output directories.
        match_mode (MatchMode): Screenshot matching rule.
        screenshots_dirname (str): Name of the bulk media folder under `assets/`.

    Returns:
        PageResult: The page output directory and the screenshots copied into it.

    Raises:
        PartitionError: If the output directory cannot be built.
    """
    page_dir = dest_root / page.page_id
    if _contains(page_dir, canonical_root):
        raise PartitionError(
            page.page_id, f"output directory {page_dir} would overwrite the archive content"
        )

    screenshots: list[str] = []
    try:
        remove_tree(page_dir)

        view_dir = page_dir / VIEW_DIRNAME
        view_dir.mkdir(parents=True)
        shutil.copy2(page.path, view_dir / page.path.name)

        assets_dir = canonical_root / ASSETS_DIRNAME
        if assets_dir.is_dir():
            page_assets = page_dir / ASSETS_DIRNAME
            shutil.copytree(
                assets_dir,
                page_assets,
                ignore=_ignore_named(screenshots_dirname),
                dirs_exist_ok=True,
            )

            page_screenshots = page_assets / screenshots_dirname
            page_screenshots.mkdir(parents=True, exist_ok=True)

            source_screenshots = assets_dir / screenshots_dirname
            if source_screenshots.is_dir():
                for entry in sorted(source_screenshots.iterdir(), key=lambda p: p.name):
                    if not screenshot_matches(entry.name, page.page_id, match_mode):
                        continue
                    if entry.is_dir():
                        shutil.copytree(
                            entry, page_screenshots / entry.name, dirs_exist_ok=True
                        )
                    else:
                        shutil.copy2(entry, page_screenshots / entry.name)
                    screenshots.append(entry.name)
        else:
            logger.debug("No %s/ folder in %s", ASSETS_DIRNAME, canonical_root)
    except PipelineIOError as e:
        raise PartitionError(page.page_id, str(e))
    except OSError as e:
        raise PartitionError(page.page_id, f"copy failed: {e}")

    logger.debug(
        "Partitioned page %s with %d screenshots", page.page_id, len(screenshots)
    )
    return PageResult(page_id=page.page_id, output_dir=page_dir, screenshots=screenshots)
