"""Shared fixtures for kustomization-generator tests."""

from collections.abc import Callable, Generator
import os
from pathlib import Path
import tempfile
from unittest.mock import MagicMock

import pytest
import requests

from kustomization_generator.config import GeneratorConfig

REGISTRY = "https://repo.test"

INDEX = """
apiVersion: v1
entries:
  app:
  - apiVersion: v2
    appVersion: 1.16.0
    name: app
    version: 0.9.0
    urls:
    - charts/app-0.9.0.tgz
  - apiVersion: v2
    appVersion: 1.16.0
    name: app
    version: 1.0.0
    urls:
    - charts/app-1.0.0.tgz
  - apiVersion: v2
    name: app
    version: 1.0.0
    urls:
    - charts/app-1.0.0-mirror.tgz
  - apiVersion: v2
    name: app
    version: 1.0
    urls:
    - /charts/app-1.0.tgz
  - apiVersion: v2
    name: app
    version: 2.0.0
    urls:
    - https://cdn.example/app.tgz
  - apiVersion: v2
    name: app
    version: 3.0.0
    urls: []
  - apiVersion: v2
    name: app
    version: 4.0.0
    urls:
    - charts/app-4.0.0.tgz
    - https://mirror.example/app-4.0.0.tgz
  other:
  - apiVersion: v2
    name: other
    version: 1.0.0
    created: 2024-01-01T00:00:00Z
    digest: 0123abcd
    urls:
    - other-1.0.0.tgz
generated: "2024-01-01T00:00:00Z"
"""

# A stand-in for helm that renders two manifests and a notes file for the
# chart `app`. Environment variables let tests inspect the invocation.
STUB_HELM = """#!/bin/sh
out=""
values=""
prev=""
for arg in "$@"; do
  case "$prev" in
    --output-dir) out="$arg" ;;
    --values) values="$arg" ;;
  esac
  prev="$arg"
done
if [ -n "$STUB_HELM_ARGS" ]; then
  printf '%s\\n' "$@" > "$STUB_HELM_ARGS"
fi
if [ -n "$STUB_HELM_VALUES" ]; then
  cp "$values" "$STUB_HELM_VALUES"
fi
if [ -n "$STUB_HELM_FAIL" ]; then
  echo "Error: $STUB_HELM_FAIL" >&2
  exit 1
fi
mkdir -p "$out/app/sub"
printf 'kind: ConfigMap\\nmetadata:\\n  name: a\\n' > "$out/app/a.yaml"
printf 'kind: ConfigMap\\nmetadata:\\n  name: b\\n' > "$out/app/sub/b.yaml"
printf 'Thank you for installing app\\n' > "$out/app/NOTES.txt"
"""


@pytest.fixture(name="make_session")
def make_session_fixture() -> Callable[[str | bytes], MagicMock]:
    """Fixture for creating a http session serving a registry index."""

    def _make_session(content: str | bytes) -> MagicMock:
        session = MagicMock(spec=requests.Session)
        if isinstance(content, str):
            content = content.encode("utf-8")
        session.get.return_value.content = content
        return session

    return _make_session


@pytest.fixture(name="session")
def session_fixture(make_session: Callable[[str | bytes], MagicMock]) -> MagicMock:
    """Fixture for a http session serving the test registry index."""
    return make_session(INDEX)


@pytest.fixture(name="generator_config")
def generator_config_fixture() -> GeneratorConfig:
    """Fixture for the configuration of the test chart."""
    return GeneratorConfig(
        registry=REGISTRY,
        chart="app",
        version="1.0.0",
        name="my-app",
        namespace="ns1",
        args=["--set", "image.tag=latest"],
        values={"replicaCount": 2, "image": {"repository": "nginx"}},
    )


@pytest.fixture(name="helm_bin")
def helm_bin_fixture(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Fixture for a stub helm executable on the search path."""
    bin_dir = tmp_path_factory.mktemp("bin")
    helm_bin = bin_dir / "helm"
    helm_bin.write_text(STUB_HELM)
    helm_bin.chmod(0o755)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    return helm_bin


@pytest.fixture(name="temp_dir")
def temp_dir_fixture(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Fixture that isolates temporary files created by the code under test."""
    temp_dir = tmp_path_factory.mktemp("tmp")
    monkeypatch.setattr(tempfile, "tempdir", str(temp_dir))
    yield temp_dir
