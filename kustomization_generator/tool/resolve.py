"""Kustomization generator `resolve` action."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from typing import cast

from kustomization_generator.registry import resolve_chart_url


class ResolveAction:
    """Print the download url of a chart version."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "resolve",
                help="Print the download url of a chart version",
                description="Looks up a chart version in the index of a helm "
                "chart registry and prints the absolute url of its archive.",
            ),
        )
        args.add_argument(
            "--registry", type=str, required=True, help="Base url of the registry"
        )
        args.add_argument("--chart", type=str, required=True, help="Chart name")
        args.add_argument(
            "--version", type=str, required=True, help="Exact chart version"
        )
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        registry: str,
        chart: str,
        version: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        print(resolve_chart_url(registry, chart, version))
