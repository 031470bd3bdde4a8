"""
Pydantic models for the inputs of the splitting pipeline.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

__all__ = [
    "PageDocument",
    "ConfigDocument",
    "ConfigTarget",
]


class PageDocument(BaseModel):
    """
    A page document found under the canonical root's `view/` folder.

    Attributes:
        page_id (str): Filename without its extension; the partition key.
        path (Path): Location of the document inside the canonical root.
    """

    model_config = ConfigDict(frozen=True)

    page_id: str
    path: Path


class ConfigDocument(BaseModel):
    """
    Shape of a shared configuration document.

    Only the `pages` list is checked. Records are kept as parsed so that
    their key order survives re-serialization.

    Attributes:
        pages (list[Any]): Per-page records, normally mappings carrying `PageName`.
    """

    model_config = ConfigDict(extra="allow")

    pages: list[Any]


class ConfigTarget(BaseModel):
    """
    A configuration document split into every page output.

    Attributes:
        name (str): Short label used in logs ("studio", "skinner").
        source (str): Filename inside the canonical root's `assets/JSON/` folder.
        destination (str): Filename written inside the page's `assets/JSON/` folder.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    source: str
    destination: str
