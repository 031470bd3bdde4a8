"""
Split shared configuration documents into single-record page documents.

A configuration document looks like

    {"pages": [{"PageName": "home", ...}, {"PageName": "about", ...}]}

and the page "home" receives a document holding only the "home" record,
without the surrounding mapping or list.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from pagesplit.schema import ConfigDocument, ConfigTarget
from pagesplit.utils import get_logger

from .assets import ASSETS_DIRNAME
from .exceptions import ParseError, StructuralMismatch

__all__ = [
    "JSON_DIRNAME",
    "PAGE_KEY",
    "CONFIG_DOCUMENTS",
    "find_page_record",
    "load_config_document",
    "write_record",
    "split_config",
    "split_configs",
]

JSON_DIRNAME = "JSON"
PAGE_KEY = "PageName"

CONFIG_DOCUMENTS: tuple[ConfigTarget, ...] = (
    ConfigTarget(name="studio", source="studioConfigs.json", destination="studioConfigs.json"),
    ConfigTarget(name="skinner", source="skinnerConfigs.json", destination="skinnerConfigs.json"),
)

logger = get_logger("pipeline")


def find_page_record(
    document: Any, page_id: str, *, key: str = PAGE_KEY
) -> dict[str, Any] | None:
    """
    Return the first record of `document["pages"]` whose `key` equals `page_id`.

    Comparison is exact and case-sensitive. Records that are not mappings
    never match.

    Args:
        document (Any): A parsed configuration document.
        page_id (str): The page identifier to look up.
        key (str): Record field holding the page identifier.

    Returns:
        dict[str, Any] | None: The matching record, or None.

    Raises:
        StructuralMismatch: If `document` is not a mapping with a `pages` list.
    """
    try:
        config = ConfigDocument.model_validate(document)
    except ValidationError as e:
        raise StructuralMismatch(
            f"Expected a mapping with a 'pages' list: {e.error_count()} error(s)"
        )

    for record in config.pages:
        if isinstance(record, Mapping) and record.get(key) == page_id:
            return dict(record)
    return None


def load_config_document(path: Path) -> Any:
    """
    Read and parse a configuration document.

    Raises:
        ParseError: If the file is not valid JSON.
    """
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"Malformed JSON in {path}: {e}")


def write_record(record: dict[str, Any], path: Path) -> Path:
    """
    Write a single record as an indented JSON document, keeping its key order.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(record, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def split_config(
    source: Path, dest_filename: str, page_id: str, page_dir: Path
) -> Path | None:
    """
    Write the record of `page_id` from `source` into the page output directory.

    Nothing is written when the source is missing, malformed, of the wrong
    shape, or has no record for the page.

    Args:
        source (Path): Shared configuration document.
        dest_filename (str): Filename inside `<page_dir>/assets/JSON/`.
        page_id (str): The page identifier.
        page_dir (Path): The page output directory.

    Returns:
        Path | None: The written document, or None if nothing was written.
    """
    if not source.is_file():
        return None

    try:
        record = find_page_record(load_config_document(source), page_id)
    except (ParseError, StructuralMismatch) as e:
        logger.warning("Skipping %s for page %s: %s", source.name, page_id, e)
        return None

    if record is None:
        logger.debug("No record for page %s in %s", page_id, source.name)
        return None

    destination = page_dir / ASSETS_DIRNAME / JSON_DIRNAME / dest_filename
    return write_record(record, destination)


def split_configs(
    canonical_root: Path,
    page_id: str,
    page_dir: Path,
    targets: tuple[ConfigTarget, ...] = CONFIG_DOCUMENTS,
) -> list[str]:
    """
    Run `split_config` for every configuration document, independently.

    The full shared documents copied along with the assets are removed from
    the page first, so a page without a matching record has no such file.

    Returns:
        list[str]: Filenames written into the page's `assets/JSON/` folder.
    """
    json_dir = canonical_root / ASSETS_DIRNAME / JSON_DIRNAME
    page_json_dir = page_dir / ASSETS_DIRNAME / JSON_DIRNAME
    written: list[str] = []
    for target in targets:
        (page_json_dir / target.source).unlink(missing_ok=True)
        (page_json_dir / target.destination).unlink(missing_ok=True)
        path = split_config(json_dir / target.source, target.destination, page_id, page_dir)
        if path is not None:
            logger.debug("Wrote %s config for page %s", target.name, page_id)
            written.append(path.name)
    return written
