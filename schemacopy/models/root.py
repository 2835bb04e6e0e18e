import os
import threading
import zipfile
from abc import ABC
from abc import abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import BinaryIO


class RootKind(str, Enum):
    ARCHIVE = 'archive'
    DIRECTORY = 'directory'

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return self.value


class ScanRoot(ABC):
    """An openable, enumerable location on the scan path."""

    kind: RootKind

    def __init__(self, path: str | Path):
        self.path = Path(path).absolute()

    @abstractmethod
    def iter_entries(self) -> Iterator[str]:
        """Yield slash-delimited names of every file below this root."""
        ...

    @abstractmethod
    def contains(self, name: str) -> bool:
        ...

    @abstractmethod
    def open(self, name: str):
        """Context manager yielding a binary stream for `name`."""
        ...

    @property
    def is_archive(self) -> bool:
        return self.kind is RootKind.ARCHIVE

    def canonical(self) -> Path:
        return self.path.resolve()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScanRoot):
            return NotImplemented
        return self.kind is other.kind and self.path == other.path

    def __hash__(self) -> int:
        return hash((self.kind, self.path))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"


class ArchiveRoot(ScanRoot):
    """A zip-format archive (jar, zip)."""

    kind = RootKind.ARCHIVE

    def __init__(self, path: str | Path):
        super().__init__(path)
        self._lock = threading.Lock()
        self._entries: tuple[str, ...] | None = None
        self._names: frozenset[str] = frozenset()

    def entries(self) -> tuple[str, ...]:
        """File entry names, read from the central directory once."""
        with self._lock:
            if self._entries is None:
                with zipfile.ZipFile(self.path) as archive:
                    self._entries = tuple(
                        info.filename for info in archive.infolist()
                        if not info.is_dir()
                    )
                self._names = frozenset(self._entries)
            return self._entries

    def iter_entries(self) -> Iterator[str]:
        yield from self.entries()

    def contains(self, name: str) -> bool:
        self.entries()
        return name in self._names

    @contextmanager
    def open(self, name: str) -> Iterator[BinaryIO]:
        with zipfile.ZipFile(self.path) as archive, archive.open(name) as stream:
            yield stream


class DirectoryRoot(ScanRoot):
    """A plain directory, e.g. compiled build output."""

    kind = RootKind.DIRECTORY

    def iter_entries(self) -> Iterator[str]:
        if not os.access(self.path, os.R_OK | os.X_OK):
            raise PermissionError(f"Permission denied: {self.path}")
        for dirpath, dirnames, filenames in os.walk(self.path, onerror=_raise):
            dirnames.sort()
            base = Path(dirpath).relative_to(self.path)
            for filename in sorted(filenames):
                yield (base / filename).as_posix()

    def contains(self, name: str) -> bool:
        return (self.path / name).is_file()

    @contextmanager
    def open(self, name: str) -> Iterator[BinaryIO]:
        with open(self.path / name, 'rb') as stream:
            yield stream


def _raise(error: OSError) -> None:
    raise error


def root_for(path: str | Path) -> ScanRoot:
    """Pick the root type matching what is on disk at `path`."""
    if Path(path).is_dir():
        return DirectoryRoot(path)
    return ArchiveRoot(path)
