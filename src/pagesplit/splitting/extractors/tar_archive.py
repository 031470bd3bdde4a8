import tarfile
from pathlib import Path

from ..exceptions import ExtractionError
from ..extractor import Extractor
from ..registry import register

__all__ = ["TarExtractor"]


@register(".tar", ".tar.gz", ".tgz", ".tar.bz2", ".tbz2", ".tar.xz", ".txz")
class TarExtractor(Extractor):
    """
    Extractor for (optionally compressed) tar archives.

    Members are extracted with the "data" filter, which rejects absolute
    paths, links leaving the destination and special files.
    """

    @classmethod
    def sniff(cls, archive_path: Path) -> bool:
        try:
            return tarfile.is_tarfile(archive_path)
        except OSError:
            return False

    def extract(self, archive_path: Path, destination: Path) -> None:
        try:
            with tarfile.open(archive_path, mode="r:*") as archive:
                archive.extractall(destination, filter="data")
        except (tarfile.TarError, EOFError) as e:
            raise ExtractionError(f"Corrupt tar archive '{archive_path.name}': {e}")
        except OSError as e:
            raise ExtractionError(f"Cannot read archive '{archive_path}': {e}")
