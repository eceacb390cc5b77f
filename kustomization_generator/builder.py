"""Library for assembling a kustomization from rendered manifests."""

import logging
from pathlib import PurePath

from .exceptions import CopyError
from .filesystem import FileSystem, LocalFileSystem
from .manifest import Kustomization

__all__ = [
    "KUSTOMIZATION_FILE",
    "build",
    "write_kustomization",
]

_LOGGER = logging.getLogger(__name__)

KUSTOMIZATION_FILE = "kustomization.yaml"


def build(
    namespace: str,
    resources: list[str],
    source: PurePath,
    destination: PurePath,
    fs: FileSystem | None = None,
) -> Kustomization:
    """Copy the rendered manifests to destination and return the kustomization.

    The copy is not atomic, a failure may leave some files in destination.
    """
    fs = fs or LocalFileSystem()
    try:
        fs.copy_tree(source, destination)
    except OSError as err:
        raise CopyError(
            f"Copying files to target failed: {source} to {destination}: {err}"
        ) from err
    _LOGGER.debug("Copied %d resources to %s", len(resources), destination)
    return Kustomization(namespace=namespace, resources=list(resources))


def write_kustomization(
    destination: PurePath,
    kustomization: Kustomization,
    fs: FileSystem | None = None,
) -> PurePath:
    """Write the kustomization file into destination and return its path."""
    fs = fs or LocalFileSystem()
    path = destination / KUSTOMIZATION_FILE
    try:
        fs.write_bytes(path, kustomization.yaml().encode("utf-8"))
    except OSError as err:
        raise CopyError(f"Writing kustomization file failed: {path}: {err}") from err
    return path
