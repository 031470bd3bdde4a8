import zipfile
import zlib
from pathlib import Path

from ..exceptions import ExtractionError
from ..extractor import Extractor
from ..registry import register

__all__ = ["ZipExtractor"]


@register(".zip")
class ZipExtractor(Extractor):
    """
    Extractor for ZIP archives.

    `ZipFile.extractall` drops absolute paths and `..` components from member
    names, so every member lands below the destination.
    """

    @classmethod
    def sniff(cls, archive_path: Path) -> bool:
        return zipfile.is_zipfile(archive_path)

    def extract(self, archive_path: Path, destination: Path) -> None:
        try:
            with zipfile.ZipFile(archive_path) as archive:
                archive.extractall(destination)
        except (zipfile.BadZipFile, zlib.error, EOFError) as e:
            raise ExtractionError(f"Corrupt ZIP archive '{archive_path.name}': {e}")
        except (RuntimeError, NotImplementedError) as e:
            # encrypted members or an unsupported compression method
            raise ExtractionError(f"Cannot read ZIP archive '{archive_path.name}': {e}")
        except OSError as e:
            raise ExtractionError(f"Cannot read archive '{archive_path}': {e}")
