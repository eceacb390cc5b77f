"""Kustomization generator `generate` action."""

from argparse import (
    ArgumentParser,
    _SubParsersAction as SubParsersAction,
    BooleanOptionalAction,
)
import logging
import pathlib
from typing import Any, cast

from kustomization_generator import builder
from kustomization_generator.config import read_config
from kustomization_generator.generator import HelmGenerator
from kustomization_generator.helm import Options

_LOGGER = logging.getLogger(__name__)


class GenerateAction:
    """Render a helm chart into a kustomization directory."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "generate",
                help="Render a helm chart into a kustomization directory",
                description="""Resolves the chart version in its registry, renders
                    it with helm template and copies the rendered manifests into
                    the output directory along with a kustomization listing them.""",
            ),
        )
        args.add_argument(
            "config", type=pathlib.Path, help="Path to the generator configuration"
        )
        args.add_argument(
            "output_dir",
            type=pathlib.Path,
            help="Directory to copy the rendered manifests to",
        )
        args.add_argument(
            "--kustomization-file",
            default=True,
            action=BooleanOptionalAction,
            help="Write a kustomization.yaml into the output directory, "
            "otherwise print it",
        )
        args.add_argument(
            "--helm-bin",
            type=str,
            default=Options.helm_bin,
            help="Name or path of the helm executable",
        )
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        config: pathlib.Path,
        output_dir: pathlib.Path,
        kustomization_file: bool,
        helm_bin: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        generator_config = read_config(config)
        kustomization = HelmGenerator(Options(helm_bin=helm_bin)).generate(
            generator_config, output_dir
        )
        if not kustomization_file:
            print(kustomization.yaml(), end="")
            return
        path = builder.write_kustomization(output_dir, kustomization)
        _LOGGER.info("Wrote %s with %d resources", path, len(kustomization.resources))
