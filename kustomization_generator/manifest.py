"""Representation of helm registry indexes and generated kustomizations.

A `RegistryIndex` is the `index.yaml` document served at the root of a helm
chart repository. It lists every published version of every chart along with
the urls of the chart archives:

```yaml
apiVersion: v1
entries:
  app:
  - apiVersion: v2
    appVersion: 1.16.0
    name: app
    version: 1.0.0
    urls:
    - charts/app-1.0.0.tgz
```

A `Kustomization` is the result of a generator run, listing the rendered
manifests relative to the directory they were copied to.
"""

from dataclasses import dataclass, field
import logging
from typing import Any, ClassVar

from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig
import yaml

from .exceptions import ParseError

__all__ = [
    "ChartEntry",
    "RegistryIndex",
    "Kustomization",
]

_LOGGER = logging.getLogger(__name__)


KUSTOMIZE_API_VERSION = "kustomize.config.k8s.io/v1beta1"
KUSTOMIZE_KIND = "Kustomization"


@dataclass
class BaseManifest(DataClassDictMixin):
    """Base class for all manifest objects."""

    def yaml(self) -> str:
        """Return a YAML string representation of the object."""
        return yaml.dump(self.to_dict(), sort_keys=False, explicit_start=True)

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True


def _str_field(doc: dict[str, Any], key: str) -> str | None:
    """Return a scalar field as a string, if present."""
    if (value := doc.get(key)) is None:
        return None
    if isinstance(value, (dict, list)):
        raise ParseError(f"Invalid field '{key}' expected a scalar: {value}")
    return str(value)


@dataclass
class ChartEntry(BaseManifest):
    """A single published version of a chart in a registry index."""

    name: str
    """The name of the chart."""

    version: str
    """The version of the chart."""

    urls: list[str] = field(default_factory=list)
    """Download urls of the chart archive, absolute or relative to the registry."""

    api_version: str | None = field(
        metadata=field_options(alias="apiVersion"), default=None
    )
    """The chart apiVersion."""

    app_version: str | None = field(
        metadata=field_options(alias="appVersion"), default=None
    )
    """The version of the application packaged by the chart."""

    @classmethod
    def parse_doc(cls, doc: Any, chart: str) -> "ChartEntry":
        """Parse a ChartEntry from an entry of the index document."""
        if not isinstance(doc, dict):
            raise ParseError(f"Invalid entry for chart '{chart}': {doc}")
        if (version := _str_field(doc, "version")) is None:
            raise ParseError(f"Invalid entry for chart '{chart}' missing version")
        urls = doc.get("urls") or []
        if not isinstance(urls, list) or not all(isinstance(u, str) for u in urls):
            raise ParseError(
                f"Invalid entry for chart '{chart}' version '{version}' urls: {urls}"
            )
        return cls(
            name=_str_field(doc, "name") or chart,
            version=version,
            urls=urls,
            api_version=_str_field(doc, "apiVersion"),
            app_version=_str_field(doc, "appVersion"),
        )


@dataclass
class RegistryIndex(BaseManifest):
    """The version index of a helm chart registry."""

    api_version: str | None = field(
        metadata=field_options(alias="apiVersion"), default=None
    )
    """The apiVersion of the index document."""

    entries: dict[str, list[ChartEntry]] = field(default_factory=dict)
    """Published chart versions keyed by chart name, in index order."""

    @classmethod
    def parse_doc(cls, doc: Any) -> "RegistryIndex":
        """Parse a RegistryIndex from a loaded index document."""
        if not isinstance(doc, dict):
            raise ParseError(f"Invalid index document: {type(doc).__name__}")
        entries = doc.get("entries") or {}
        if not isinstance(entries, dict):
            raise ParseError(f"Invalid index entries: {type(entries).__name__}")
        parsed: dict[str, list[ChartEntry]] = {}
        for chart, versions in entries.items():
            if not isinstance(versions, list):
                raise ParseError(f"Invalid versions for chart '{chart}': {versions}")
            parsed[str(chart)] = [
                ChartEntry.parse_doc(version, str(chart)) for version in versions
            ]
        return cls(api_version=_str_field(doc, "apiVersion"), entries=parsed)

    @classmethod
    def parse_yaml(cls, content: str | bytes) -> "RegistryIndex":
        """Parse a serialized index document."""
        try:
            # Scalars keep their literal text, so `1.10` is not read as a number
            doc = yaml.load(content, Loader=yaml.BaseLoader)
        except yaml.YAMLError as err:
            raise ParseError(f"Unable to parse index document: {err}") from err
        return cls.parse_doc(doc)


@dataclass
class Kustomization(BaseManifest):
    """A kustomization listing the manifests rendered by a generator."""

    api_version: ClassVar[str] = KUSTOMIZE_API_VERSION
    """The apiVersion of the kustomization document."""

    kind: ClassVar[str] = KUSTOMIZE_KIND
    """The kind of the kustomization document."""

    namespace: str
    """The namespace applied to all resources."""

    resources: list[str] = field(default_factory=list)
    """Paths of the rendered manifests relative to the kustomization."""

    def to_document(self) -> dict[str, Any]:
        """Return the kustomization as a kustomize document."""
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            **self.to_dict(),
        }

    def yaml(self) -> str:
        """Return the kustomize document as YAML."""
        return yaml.dump(self.to_document(), sort_keys=False, explicit_start=True)
