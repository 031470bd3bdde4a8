"""
Package 'splitting'
"""

from .registry import archive_base_name, get_extractor
from .extractors import ZipExtractor, TarExtractor
from .archive import choose_root, normalize_archive
from .discovery import discover_pages, page_identifiers
from .assets import partition_page, screenshot_matches
from .configs import CONFIG_DOCUMENTS, find_page_record, split_config, split_configs
from .exceptions import (
    PageSplitError,
    ExtractionError,
    PipelineIOError,
    PartitionError,
    ParseError,
    StructuralMismatch,
)
from .pipeline import PageSplitter, split_archive

__all__ = [
    "archive_base_name",
    "get_extractor",
    "ZipExtractor",
    "TarExtractor",
    "choose_root",
    "normalize_archive",
    "discover_pages",
    "page_identifiers",
    "partition_page",
    "screenshot_matches",
    "CONFIG_DOCUMENTS",
    "find_page_record",
    "split_config",
    "split_configs",
    "PageSplitError",
    "ExtractionError",
    "PipelineIOError",
    "PartitionError",
    "ParseError",
    "StructuralMismatch",
    "PageSplitter",
    "split_archive",
]
