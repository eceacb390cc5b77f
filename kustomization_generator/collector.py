"""Library for discovering rendered manifests in a directory tree."""

from collections.abc import Sequence
import logging
from pathlib import PurePath
import re

from .exceptions import ListError
from .filesystem import FileSystem, LocalFileSystem

__all__ = [
    "MANIFEST_PATTERN",
    "collect",
]

_LOGGER = logging.getLogger(__name__)

MANIFEST_PATTERN = re.compile(r"\.ya?ml$")
"""Matches the file names of YAML manifests."""


def _matches(path: str, patterns: Sequence[re.Pattern[str]]) -> bool:
    return any(pattern.search(path) for pattern in patterns)


def collect(
    root: PurePath,
    includes: Sequence[re.Pattern[str]],
    excludes: Sequence[re.Pattern[str]] = (),
    fs: FileSystem | None = None,
) -> list[str]:
    """Return the files below root matching an include and no exclude pattern.

    Patterns are searched in the forward slash separated path of each file
    relative to root, and the matching relative paths are returned in the
    order they were walked.
    """
    fs = fs or LocalFileSystem()
    try:
        paths = [path.as_posix() for path in fs.walk(root)]
    except OSError as err:
        raise ListError(
            f"Listing helm generated resources failed: {root}: {err}"
        ) from err
    results = [
        path
        for path in paths
        if _matches(path, includes) and not _matches(path, excludes)
    ]
    _LOGGER.debug("Found %d of %d files in %s", len(results), len(paths), root)
    return results
