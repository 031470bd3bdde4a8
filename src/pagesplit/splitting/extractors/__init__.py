from .zip_archive import ZipExtractor
from .tar_archive import TarExtractor

__all__ = [
    "ZipExtractor",
    "TarExtractor",
]
