"""
Entry and capacity types for the FS operator.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from core.errors import InvalidUsageError


def join_path(*parts: str, separator: str = os.sep) -> str:
    """
    Join path segments with a separator, never doubling it.

    Empty segments are skipped. A leading separator on the first segment
    (an absolute path) is preserved.
    """
    segments = [p for p in parts if p]
    if not segments:
        return ""

    head = segments[0]
    joined = head.rstrip(separator) or separator
    for segment in segments[1:]:
        segment = segment.strip(separator)
        if not segment:
            continue
        if joined.endswith(separator):
            joined = joined + segment
        else:
            joined = joined + separator + segment
    return joined


class CapacityUnit(Enum):
    """Scale factors used to express a byte count."""
    BYTE = 1
    KILOBYTE = 1024
    MEGABYTE = 1024 ** 2
    GIGABYTE = 1024 ** 3
    TERABYTE = 1024 ** 4
    PETABYTE = 1024 ** 5

    @property
    def scale_factor(self) -> int:
        return self.value

    @classmethod
    def parse(cls, name: Union[str, "CapacityUnit"]) -> "CapacityUnit":
        """Resolve a unit from its (case-insensitive) name."""
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise InvalidUsageError(f"Unknown capacity unit \"{name}\"") from None


PathLike = Union[str, os.PathLike, "FileEntry"]


@dataclass(frozen=True)
class FileEntry:
    """
    A path on the host filesystem.

    Holds nothing but the path string; kind, existence and length are
    queried from the host every time they are read.
    """
    path: str

    @classmethod
    def of(cls, value: PathLike) -> "FileEntry":
        if isinstance(value, FileEntry):
            return value
        return cls(os.fspath(value))

    def __fspath__(self) -> str:
        return self.path

    def __str__(self) -> str:
        return self.path

    @property
    def name(self) -> str:
        return Path(self.path).name

    @property
    def parent(self) -> "FileEntry":
        return FileEntry(str(Path(self.path).parent))

    @property
    def exists(self) -> bool:
        return os.path.lexists(self.path)

    @property
    def is_dir(self) -> bool:
        return os.path.isdir(self.path)

    @property
    def is_file(self) -> bool:
        return os.path.isfile(self.path)

    @property
    def length(self) -> int:
        """Size in bytes for a file, 0 for anything else."""
        return os.path.getsize(self.path) if self.is_file else 0

    def child(self, name: str, separator: Optional[str] = None) -> "FileEntry":
        return FileEntry(join_path(self.path, name, separator=separator or os.sep))

    def as_path(self) -> Path:
        return Path(self.path)
