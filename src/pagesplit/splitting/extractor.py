"""
Abstract base class for unpacking an archive onto disk.
"""

from abc import ABC, abstractmethod
from pathlib import Path

__all__ = ["Extractor"]


class Extractor(ABC):
    """
    Abstract base class for archive formats.

    Subclasses are registered under one or more filename suffixes with
    `pagesplit.splitting.registry.register`.
    """

    @classmethod
    @abstractmethod
    def sniff(cls, archive_path: Path) -> bool:
        """
        Whether the file content looks like this archive format.

        Used when the filename suffix is not registered.
        """
        ...

    @abstractmethod
    def extract(self, archive_path: Path, destination: Path) -> None:
        """
        Extract every member of the archive below `destination`.

        Args:
            archive_path (Path): The archive to read.
            destination (Path): An existing, empty directory.

        Raises:
            ExtractionError: If the archive cannot be read or is corrupt.
        """
        ...
