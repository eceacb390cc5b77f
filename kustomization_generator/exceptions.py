"""Exceptions related to kustomization-generator.

Every failure in the generator pipeline is raised as a subclass of
`GeneratorException`. Failures are grouped by the stage that produced them
so callers can tell a registry problem apart from a helm problem without
parsing messages.
"""

from typing import ClassVar

__all__ = [
    "GeneratorException",
    "InputException",
    "CommandException",
    "ResolveException",
    "NetworkError",
    "ParseError",
    "ChartNotFoundError",
    "VersionNotFoundError",
    "UrlMissingError",
    "AmbiguousUrlError",
    "TemplateException",
    "TempResourceError",
    "ExecutableNotFoundError",
    "RenderError",
    "CollectException",
    "ListError",
    "BuildException",
    "CopyError",
]


class GeneratorException(Exception):
    """Generic base exception used for this library."""

    stage: ClassVar[str | None] = None
    """Name of the pipeline stage that failed, if any."""


class InputException(GeneratorException):
    """Raised when the input files or values are not formatted as expected."""


class CommandException(GeneratorException):
    """Raised when there is a failure running a subcommand."""

    def __init__(
        self, message: str, output: str = "", raw_output: bytes = b""
    ) -> None:
        super().__init__(message)
        self.output = output
        """Combined stdout and stderr of the failed command, decoded as UTF-8.

        Bytes that are not valid UTF-8 are replaced, see `raw_output`.
        """
        self.raw_output = raw_output
        """Combined stdout and stderr of the failed command as captured."""


class ResolveException(GeneratorException):
    """Raised when a chart can't be resolved to a download url."""

    stage = "resolve"


class NetworkError(ResolveException):
    """Raised when the registry index could not be fetched."""


class ParseError(ResolveException):
    """Raised when the registry index is not a valid index document."""


class ChartNotFoundError(ResolveException):
    """Raised when the chart is not listed in the registry index."""


class VersionNotFoundError(ResolveException):
    """Raised when the chart exists but the requested version does not."""


class UrlMissingError(ResolveException):
    """Raised when the chart version has no download urls."""


class AmbiguousUrlError(ResolveException):
    """Raised when the chart version has more than one download url."""


class TemplateException(GeneratorException):
    """Raised when there is a failure rendering a chart with helm."""

    stage = "render"


class TempResourceError(TemplateException):
    """Raised when a temporary file or directory could not be prepared."""


class ExecutableNotFoundError(TemplateException):
    """Raised when the helm executable is not on the search path."""


class RenderError(TemplateException, CommandException):
    """Raised when `helm template` exits with a failure."""


class CollectException(GeneratorException):
    """Raised when the rendered manifests could not be discovered."""

    stage = "collect"


class ListError(CollectException):
    """Raised when a directory walk could not complete."""


class BuildException(GeneratorException):
    """Raised when the final kustomization could not be assembled."""

    stage = "build"


class CopyError(BuildException):
    """Raised when the rendered manifests could not be copied to the target."""
