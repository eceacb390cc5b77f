"""Library for issuing commands and returning the result."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
import os
from pathlib import Path
import shlex
import shutil
import subprocess

from .exceptions import CommandException, GeneratorException

_LOGGER = logging.getLogger(__name__)


# No public API
__all__: list[str] = []


@dataclass(frozen=True)
class CommandResult:
    """The outcome of a finished command."""

    returncode: int
    """Exit status of the process."""

    output: bytes
    """Combined stdout and stderr of the process."""


class Task(ABC):
    """An instance of a task to execute."""

    @abstractmethod
    def run(self) -> CommandResult:
        """Execute the task and return the result."""


def format_path(path: Path) -> str:
    """Format path for debugging."""
    if path.is_absolute():
        cwd = Path.cwd()
        if path.is_relative_to(cwd):
            rel_path = str(path.relative_to(cwd))
            return f"{rel_path} (abs)"
    return str(path)


@dataclass
class Command(Task):
    """An instance of a command to run."""

    cmd: list[str]
    """Array of command line arguments."""

    cwd: Path | None = None
    """Current working directory."""

    env: dict[str, str] | None = None
    """Environment variables for the subprocess."""

    @property
    def string(self) -> str:
        """Render the command as a single string."""
        return " ".join([shlex.quote(arg) for arg in self.cmd])

    def __str__(self) -> str:
        """Render as a debug string."""
        cwd: str = ""
        if self.cwd:
            cwd = f"({format_path(self.cwd)}) "
        return f"{cwd}{self.string}"

    def run(self) -> CommandResult:
        """Run the command, capturing stdout and stderr as a single stream."""
        _LOGGER.debug("Running command: %s", self)
        env = {
            **os.environ,
            **(self.env if self.env else {}),
        }
        proc = subprocess.run(
            self.cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            cwd=self.cwd,
            env=env,
            check=False,
        )
        return CommandResult(returncode=proc.returncode, output=proc.stdout)


def which(name: str, exc: type[GeneratorException] = CommandException) -> str:
    """Resolve an executable on the search path."""
    if (path := shutil.which(name)) is None:
        raise exc(f"Executable '{name}' not found")
    return path


def run(task: Task, exc: type[CommandException] = CommandException) -> str:
    """Run the specified task and return its output.

    A non-zero exit status raises `exc` with the captured output attached.
    """
    try:
        result = task.run()
    except OSError as err:
        raise exc(f"Command '{task}' failed to start: {err}") from err
    output = result.output.decode("utf-8", errors="replace")
    if result.returncode:
        errors = [f"Command '{task}' failed with return code {result.returncode}"]
        if output:
            errors.append(output)
        _LOGGER.debug("\n".join(errors))
        raise exc("\n".join(errors), output=output, raw_output=result.output)
    return output
