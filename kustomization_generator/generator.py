"""Library for generating a kustomization from a helm chart.

This runs the complete pipeline: the chart version is resolved to an archive
url in its registry, rendered with `helm template`, and the rendered manifests
are copied to a target directory and listed in a kustomization:

```python
from pathlib import Path

from kustomization_generator.config import read_config
from kustomization_generator.generator import HelmGenerator

config = read_config(Path("generator.yaml"))
kustomization = HelmGenerator().generate(config, Path("/tmp/out"))
print(kustomization.yaml())
```
"""

from collections.abc import Callable
import logging
from pathlib import Path

import requests

from . import builder, collector, registry
from .command import Task
from .config import GeneratorConfig
from .context import trace_context
from .filesystem import FileSystem, LocalFileSystem
from .helm import Helm, Options, output_dir
from .manifest import Kustomization

__all__ = [
    "HelmGenerator",
]

_LOGGER = logging.getLogger(__name__)


class HelmGenerator:
    """Generates kustomizations from helm charts."""

    def __init__(
        self,
        options: Options | None = None,
        session: requests.Session | None = None,
        fs: FileSystem | None = None,
        task_factory: Callable[[list[str]], Task] | None = None,
    ) -> None:
        """Initialize HelmGenerator."""
        self._session = session
        self._fs = fs or LocalFileSystem()
        self._helm = Helm(options, task_factory=task_factory)

    def generate(self, config: GeneratorConfig, destination: Path) -> Kustomization:
        """Render the configured chart and copy the manifests to destination.

        The returned kustomization lists every rendered manifest relative to
        destination. Temporary files are removed before returning, also when
        a stage fails.
        """
        _LOGGER.info(
            "Generating %s from chart %s version %s",
            config.name,
            config.chart,
            config.version,
        )
        with trace_context("resolve"):
            chart_url = registry.resolve_chart_url(
                config.registry, config.chart, config.version, session=self._session
            )
        with output_dir() as out_dir:
            with trace_context("render"):
                chart_dir = self._helm.template(config, chart_url, out_dir)
            with trace_context("collect"):
                resources = collector.collect(
                    chart_dir, [collector.MANIFEST_PATTERN], fs=self._fs
                )
            with trace_context("build"):
                return builder.build(
                    config.namespace, resources, chart_dir, destination, fs=self._fs
                )
