from pathlib import Path
from typing import Iterator

from pagesplit.schema import PageDocument

__all__ = ["VIEW_DIRNAME", "discover_pages", "page_identifiers"]

VIEW_DIRNAME = "view"


def discover_pages(canonical_root: Path, *, suffix: str = ".html") -> Iterator[PageDocument]:
    """
    Lazily yield the page documents found directly under `view/`.

    Subdirectories are not searched. Documents are yielded sorted by filename.
    A canonical root without a `view/` folder yields nothing.

    Args:
        canonical_root (Path): The normalized archive root.
        suffix (str): Filename suffix of page documents (case-sensitive).

    Yields:
        PageDocument: One per page document.
    """
    view_dir = canonical_root / VIEW_DIRNAME
    if not view_dir.is_dir():
        return

    for path in sorted(view_dir.iterdir(), key=lambda p: p.name):
        if not path.is_file() or not path.name.endswith(suffix):
            continue
        page_id = path.name[: -len(suffix)] if suffix else path.stem
        if page_id in {"", ".", ".."}:
            # would name the output root or its parent
            continue
        yield PageDocument(page_id=page_id, path=path)


def page_identifiers(canonical_root: Path, *, suffix: str = ".html") -> Iterator[str]:
    """Lazily yield the identifier of every page document."""
    for page in discover_pages(canonical_root, suffix=suffix):
        yield page.page_id
