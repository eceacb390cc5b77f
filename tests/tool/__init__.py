"""Test helpers for kustomization-generator tools."""

import sys

from kustomization_generator.command import Command, run

GENERATOR_CMD = [sys.executable, "-m", "kustomization_generator"]


def run_command(args: list[str], env: dict[str, str] | None = None) -> str:
    return run(Command(GENERATOR_CMD + args, env=env))
