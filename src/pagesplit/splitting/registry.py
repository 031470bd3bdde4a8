from pathlib import Path
from typing import Type

from .exceptions import ExtractionError
from .extractor import Extractor

__all__ = ["register", "get_extractor", "archive_base_name"]

_registry: dict[str, Type[Extractor]] = {}


def register(*suffixes: str):
    """
    Decorator to register an Extractor subclass under filename suffixes.
    Matching is case-insensitive.
    """

    def decorator(cls: Type[Extractor]) -> Type[Extractor]:
        for suffix in suffixes:
            _registry[suffix.lower()] = cls
        return cls

    return decorator


def _match_suffix(filename: str) -> str | None:
    name = filename.lower()
    matches = [suffix for suffix in _registry if name.endswith(suffix)]
    if not matches:
        return None
    return max(matches, key=len)


def get_extractor(archive_path: Path) -> Extractor:
    """
    Lookup an Extractor by the archive's suffix, falling back to its content.
    Raises ExtractionError if no registered format matches.
    """
    suffix = _match_suffix(archive_path.name)
    if suffix is not None:
        return _registry[suffix]()

    if archive_path.is_file():
        # dict preserves registration order, so zip is sniffed before tar
        for cls in dict.fromkeys(_registry.values()):
            if cls.sniff(archive_path):
                return cls()

    available = ", ".join(_registry.keys())
    raise ExtractionError(
        f"Unsupported archive '{archive_path.name}'. Supported suffixes: {available}"
    )


def archive_base_name(filename: str) -> str:
    """
    Strip the archive extension from an uploaded filename.

    `bundle.zip` and `bundle.tar.gz` both give `bundle`; an unregistered
    suffix is stripped like `Path.stem` does.
    """
    name = Path(filename).name
    suffix = _match_suffix(name)
    if suffix is not None and len(name) > len(suffix):
        return name[: -len(suffix)]
    return Path(name).stem
