"""Command line tool for generating kustomizations from helm charts."""

import argparse
import logging
import sys
import traceback

from kustomization_generator.exceptions import GeneratorException
from . import generate, resolve

_LOGGER = logging.getLogger(__name__)

PROG = "kustomization-generator"


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Command line utility for rendering helm charts into "
        "kustomizations.",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )

    subparsers = parser.add_subparsers(dest="command", help="Command", required=True)

    generate.GenerateAction.register(subparsers)
    resolve.ResolveAction.register(subparsers)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Kustomization generator command line tool main entry point."""
    parser = _make_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        logging.basicConfig(level=args.log_level)

    action = args.cls()
    try:
        action.run(**vars(args))
    except GeneratorException as err:
        if args.log_level == "DEBUG":
            traceback.print_exc(file=sys.stderr)
        stage = f"[{err.stage}] " if err.stage else ""
        print(f"{PROG} error: {stage}{err}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
