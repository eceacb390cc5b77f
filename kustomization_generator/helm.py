"""Library for running `helm template` to render a chart into manifest files.

The chart is rendered from its archive url into a temporary output directory,
where helm nests the manifests under a directory named after the chart:

```python
from kustomization_generator.config import GeneratorConfig
from kustomization_generator.helm import Helm, output_dir

config = GeneratorConfig(
    registry="https://charts.example.com",
    chart="app",
    version="1.0.0",
    name="my-app",
    namespace="apps",
)
with output_dir() as out:
    chart_dir = Helm().template(config, "https://charts.example.com/app-1.0.0.tgz", out)
    for path in chart_dir.rglob("*.yaml"):
        print(f"Rendered {path}")
```
"""

from collections.abc import Callable, Generator
from contextlib import contextmanager
from dataclasses import dataclass
import logging
from pathlib import Path
import tempfile
from typing import Any

from slugify import slugify
import yaml

from . import command
from .config import GeneratorConfig
from .exceptions import ExecutableNotFoundError, RenderError, TempResourceError

__all__ = [
    "Helm",
    "Options",
    "output_dir",
    "values_file",
]

_LOGGER = logging.getLogger(__name__)


HELM_BIN = "helm"

TEMP_PREFIX = ".kustomization-generator-"


@contextmanager
def values_file(
    release_name: str, values: dict[str, Any] | None
) -> Generator[Path, None, None]:
    """Context manager for a temporary values file passed to helm.

    The file is removed when the context exits, whether or not helm succeeded.
    """
    try:
        temp_file = tempfile.NamedTemporaryFile(
            mode="w+",
            prefix=f"{TEMP_PREFIX}{slugify(release_name)}-",
            suffix="-values.yaml",
        )
    except OSError as err:
        raise TempResourceError(
            f"Writing temporary values file failed: {err}"
        ) from err
    with temp_file:
        temp_file_path = Path(temp_file.name)
        try:
            temp_file_path.write_text(yaml.dump(values or {}, sort_keys=False))
        except (OSError, yaml.YAMLError) as err:
            raise TempResourceError(
                f"Writing temporary values file failed: {err}"
            ) from err
        yield temp_file_path


@contextmanager
def output_dir() -> Generator[Path, None, None]:
    """Context manager for a temporary directory helm renders into."""
    try:
        temp_dir = tempfile.TemporaryDirectory(prefix=TEMP_PREFIX)
    except OSError as err:
        raise TempResourceError(
            f"Preparing temporary folder failed: {err}"
        ) from err
    with temp_dir as name:
        yield Path(name)


@dataclass
class Options:
    """Options to use when rendering a helm chart."""

    helm_bin: str = HELM_BIN
    """Name or path of the helm executable."""


def template_args(
    config: GeneratorConfig, chart_url: str, out_dir: Path, values_path: Path
) -> list[str]:
    """Helm template CLI arguments, with the configured args appended last."""
    args = [
        "template",
        config.name,
        chart_url,
        "--namespace",
        config.namespace,
        "--output-dir",
        str(out_dir),
        "--values",
        str(values_path),
    ]
    args.extend(config.args)
    return args


class Helm:
    """Renders helm charts into manifest files."""

    def __init__(
        self,
        options: Options | None = None,
        task_factory: Callable[[list[str]], command.Task] | None = None,
    ) -> None:
        """Initialize Helm.

        The task factory creates the task that runs a helm command line and
        defaults to running a subprocess.
        """
        self._options = options or Options()
        self._task_factory = task_factory or command.Command

    def template(self, config: GeneratorConfig, chart_url: str, out_dir: Path) -> Path:
        """Render the chart into the output directory.

        Returns the directory containing the rendered manifests of the chart.
        """
        with values_file(config.name, config.values) as values_path:
            try:
                helm_bin = command.which(
                    self._options.helm_bin, exc=ExecutableNotFoundError
                )
            except ExecutableNotFoundError as err:
                raise ExecutableNotFoundError(f"Executing helm failed: {err}") from err
            args = [helm_bin] + template_args(config, chart_url, out_dir, values_path)
            try:
                command.run(self._task_factory(args), exc=RenderError)
            except RenderError as err:
                raise RenderError(
                    f"Executing helm failed: {err}",
                    output=err.output,
                    raw_output=err.raw_output,
                ) from err
        return out_dir / config.chart
