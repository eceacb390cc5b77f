"""Configuration objects for kustomization-generator.

The generator is configured with a YAML document describing the chart to
render and the values to render it with:

```yaml
registry: https://charts.example.com
chart: app
version: 1.0.0
name: my-app
namespace: apps
args:
- --include-crds
values:
  replicaCount: 2
```
"""

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Any

from mashumaro import DataClassDictMixin
from mashumaro.exceptions import MissingField, InvalidFieldValue
import yaml

from .exceptions import InputException

__all__ = [
    "GeneratorConfig",
    "read_config",
]

_LOGGER = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("registry", "chart", "version", "name", "namespace")


@dataclass
class GeneratorConfig(DataClassDictMixin):
    """Input for generating a kustomization from a helm chart."""

    registry: str
    """Base url of the helm chart registry."""

    chart: str
    """The name of the chart in the registry."""

    version: str
    """The exact version of the chart to render."""

    name: str
    """The helm release name."""

    namespace: str
    """The namespace to render the chart into."""

    args: list[str] = field(default_factory=list)
    """Extra flags passed to `helm template` after the generated ones."""

    values: dict[str, Any] | None = None
    """Values to render the chart with, passed through as-is."""

    @classmethod
    def parse_doc(cls, doc: Any) -> "GeneratorConfig":
        """Parse a GeneratorConfig from a loaded configuration document."""
        if not isinstance(doc, dict):
            raise InputException(f"Invalid configuration, expected a mapping: {doc}")
        for key in _REQUIRED_FIELDS:
            value = doc.get(key)
            if value is None or isinstance(value, (dict, list)) or value == "":
                raise InputException(f"Invalid configuration missing '{key}': {doc}")
        args = doc.get("args") or []
        if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            raise InputException(
                f"Invalid configuration 'args' must be strings: {args}"
            )
        values = doc.get("values")
        if values is not None and not isinstance(values, dict):
            raise InputException(
                f"Invalid configuration 'values' must be a mapping: {values}"
            )
        try:
            return cls.from_dict(
                {
                    **{key: str(doc[key]) for key in _REQUIRED_FIELDS},
                    "args": args,
                    "values": values,
                }
            )
        except (MissingField, InvalidFieldValue) as err:
            raise InputException(f"Invalid configuration: {err}") from err


def read_config(config_path: Path) -> GeneratorConfig:
    """Return the generator configuration stored in a YAML file."""
    _LOGGER.debug("Reading configuration %s", config_path)
    try:
        content = config_path.read_text()
    except OSError as err:
        raise InputException(
            f"Unable to read configuration {config_path}: {err}"
        ) from err
    try:
        doc = yaml.safe_load(content)
        literal = yaml.load(content, Loader=yaml.BaseLoader)
    except yaml.YAMLError as err:
        raise InputException(
            f"Unable to parse configuration {config_path}: {err}"
        ) from err
    if isinstance(doc, dict) and isinstance(literal, dict):
        # Scalars such as `version: 1.10` keep their literal text
        for key in _REQUIRED_FIELDS:
            if isinstance(doc.get(key), (int, float)) and isinstance(
                literal.get(key), str
            ):
                doc[key] = literal[key]
    return GeneratorConfig.parse_doc(doc)
