"""Tests for the kustomization builder."""

from pathlib import Path, PurePosixPath

import pytest
import yaml

from kustomization_generator.builder import build, write_kustomization
from kustomization_generator.exceptions import CopyError
from kustomization_generator.filesystem import InMemoryFileSystem
from kustomization_generator.manifest import Kustomization


@pytest.fixture(name="chart_dir")
def chart_dir_fixture(tmp_path: Path) -> Path:
    """Fixture for a directory of rendered manifests."""
    chart_dir = tmp_path / "out" / "app"
    (chart_dir / "sub").mkdir(parents=True)
    (chart_dir / "a.yaml").write_text("kind: ConfigMap\n")
    (chart_dir / "sub" / "b.yaml").write_bytes(b"kind: Secret\ndata: \x00\xff\n")
    (chart_dir / "NOTES.txt").write_text("notes\n")
    return chart_dir


def test_build(chart_dir: Path, tmp_path: Path) -> None:
    """Test the rendered manifests are copied and listed."""
    destination = tmp_path / "dest"
    resources = ["a.yaml", "sub/b.yaml"]
    kustomization = build("ns1", resources, chart_dir, destination)
    assert kustomization == Kustomization(namespace="ns1", resources=resources)
    for path in kustomization.resources:
        assert (destination / path).read_bytes() == (chart_dir / path).read_bytes()
    assert (destination / "NOTES.txt").exists()


def test_build_keeps_resource_order(chart_dir: Path, tmp_path: Path) -> None:
    """Test resources are listed in the order collected."""
    resources = ["sub/b.yaml", "a.yaml"]
    kustomization = build("ns1", resources, chart_dir, tmp_path / "dest")
    assert kustomization.resources == ["sub/b.yaml", "a.yaml"]


def test_build_existing_destination(chart_dir: Path, tmp_path: Path) -> None:
    """Test copying into a directory that already has files."""
    destination = tmp_path / "dest"
    destination.mkdir()
    (destination / "existing.yaml").write_text("kind: Namespace\n")
    build("ns1", ["a.yaml"], chart_dir, destination)
    assert (destination / "existing.yaml").exists()
    assert (destination / "a.yaml").read_text() == "kind: ConfigMap\n"


def test_build_copy_failure(tmp_path: Path) -> None:
    """Test a copy failure."""
    with pytest.raises(
        CopyError, match="^Copying files to target failed: "
    ) as exc_info:
        build("ns1", ["a.yaml"], tmp_path / "missing", tmp_path / "dest")
    assert exc_info.value.stage == "build"


def test_build_in_memory() -> None:
    """Test building with an in memory filesystem."""
    fs = InMemoryFileSystem(
        {
            "/out/app/a.yaml": b"kind: ConfigMap\n",
            "/out/app/sub/b.yaml": b"kind: Secret\n",
            "/out/other.yaml": b"kind: Pod\n",
        }
    )
    kustomization = build(
        "ns1",
        ["a.yaml", "sub/b.yaml"],
        PurePosixPath("/out/app"),
        PurePosixPath("/dest"),
        fs=fs,
    )
    assert kustomization.resources == ["a.yaml", "sub/b.yaml"]
    assert fs.files["/dest/a.yaml"] == b"kind: ConfigMap\n"
    assert fs.files["/dest/sub/b.yaml"] == b"kind: Secret\n"
    assert "/dest/other.yaml" not in fs.files


def test_write_kustomization(tmp_path: Path) -> None:
    """Test writing the kustomization file."""
    kustomization = Kustomization(namespace="ns1", resources=["a.yaml", "sub/b.yaml"])
    path = write_kustomization(tmp_path, kustomization)
    assert path == tmp_path / "kustomization.yaml"
    assert yaml.safe_load(Path(path).read_text()) == {
        "apiVersion": "kustomize.config.k8s.io/v1beta1",
        "kind": "Kustomization",
        "namespace": "ns1",
        "resources": ["a.yaml", "sub/b.yaml"],
    }


def test_write_kustomization_failure(tmp_path: Path) -> None:
    """Test writing the kustomization file into a path that is a file."""
    target = tmp_path / "file"
    target.write_text("")
    with pytest.raises(CopyError, match="^Writing kustomization file failed: "):
        write_kustomization(target, Kustomization(namespace="ns1"))
