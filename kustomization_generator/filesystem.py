"""Filesystem access used when collecting and copying rendered manifests.

The generator only needs a handful of operations on the rendered output, so
they are kept behind the small `FileSystem` interface. `LocalFileSystem` is
used by default and `InMemoryFileSystem` is useful for tests.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
import logging
import os
from pathlib import Path, PurePath, PurePosixPath
import shutil

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "InMemoryFileSystem",
]

_LOGGER = logging.getLogger(__name__)


class FileSystem(ABC):
    """Interface for the filesystem operations used by the generator."""

    @abstractmethod
    def walk(self, root: PurePath) -> Iterator[PurePosixPath]:
        """Yield paths of all files below root, relative to root.

        Entries of each directory are visited in lexical order, descending
        into sub directories as they are encountered. Raises `OSError` if
        the walk can't complete.
        """

    @abstractmethod
    def read_bytes(self, path: PurePath) -> bytes:
        """Return the contents of a file."""

    @abstractmethod
    def write_bytes(self, path: PurePath, data: bytes) -> None:
        """Write the contents of a file, creating parent directories."""

    @abstractmethod
    def copy_tree(self, source: PurePath, destination: PurePath) -> None:
        """Recursively copy the files below source into destination."""


class LocalFileSystem(FileSystem):
    """Operations on the local disk."""

    def walk(self, root: PurePath) -> Iterator[PurePosixPath]:
        """Yield paths of all files below root, relative to root."""
        if not Path(root).is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")
        yield from self._walk(Path(root), PurePosixPath())

    def _walk(self, path: Path, prefix: PurePosixPath) -> Iterator[PurePosixPath]:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda entry: entry.name)
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                yield from self._walk(Path(entry.path), prefix / entry.name)
            elif entry.is_file():
                yield prefix / entry.name

    def read_bytes(self, path: PurePath) -> bytes:
        """Return the contents of a file."""
        return Path(path).read_bytes()

    def write_bytes(self, path: PurePath, data: bytes) -> None:
        """Write the contents of a file, creating parent directories."""
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        Path(path).write_bytes(data)

    def copy_tree(self, source: PurePath, destination: PurePath) -> None:
        """Recursively copy the files below source into destination."""
        _LOGGER.debug("Copying %s to %s", source, destination)
        shutil.copytree(source, destination, dirs_exist_ok=True)


class InMemoryFileSystem(FileSystem):
    """A filesystem holding file contents in a dictionary."""

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        """Initialize InMemoryFileSystem."""
        self._files: dict[PurePosixPath, bytes] = {}
        for path, data in (files or {}).items():
            self.write_bytes(PurePosixPath(path), data)

    @property
    def files(self) -> dict[str, bytes]:
        """Contents of all files keyed by path."""
        return {str(path): data for path, data in self._files.items()}

    def _children(self, root: PurePath) -> list[PurePosixPath]:
        root = PurePosixPath(root)
        return sorted(
            (path.relative_to(root) for path in self._files if root in path.parents),
            key=lambda path: path.parts,
        )

    def walk(self, root: PurePath) -> Iterator[PurePosixPath]:
        """Yield paths of all files below root, relative to root."""
        if not (children := self._children(root)):
            raise FileNotFoundError(f"No such directory: {root}")
        yield from children

    def read_bytes(self, path: PurePath) -> bytes:
        """Return the contents of a file."""
        if (data := self._files.get(PurePosixPath(path))) is None:
            raise FileNotFoundError(f"No such file: {path}")
        return data

    def write_bytes(self, path: PurePath, data: bytes) -> None:
        """Write the contents of a file."""
        self._files[PurePosixPath(path)] = data

    def copy_tree(self, source: PurePath, destination: PurePath) -> None:
        """Recursively copy the files below source into destination."""
        for path in self.walk(source):
            self.write_bytes(
                PurePosixPath(destination) / path,
                self.read_bytes(PurePosixPath(source) / path),
            )
