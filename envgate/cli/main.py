# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for envgate.

Runs the same gate a host runs at startup, from a YAML config, so operators
and CI can verify an environment before deploying an extension into it.

Usage:
    envgate check --config envgate.yaml
    envgate check --config envgate.yaml --framework-version 6.3
    envgate info --config envgate.yaml
"""

import argparse
import sys

from envgate.cli.commands import handle_check, handle_info
from envgate.cli.exit_codes import USER_ERROR


def _build_global_parser() -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    add_help=False so the parent's help doesn't collide with each
    subcommand's own --help.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the logging verbosity from the config.",
    )
    parent.add_argument(
        "--framework-version",
        type=str,
        default=None,
        dest="framework_version",
        help="Use this framework version instead of the one from config or the installed package.",
    )
    return parent


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    commands = [
        ("check", "Check the environment against the configured floors.", handle_check),
        ("info", "Show current and required versions for every requirement.", handle_info),
    ]

    for name, help_text, handler in commands:
        parser = subparsers.add_parser(name, parents=[parent], help=help_text)
        parser.set_defaults(func=handler)


def main() -> None:
    """
    Main CLI entrypoint. pyproject.toml's [project.scripts] points here.

    If no subcommand is given, we show help and exit with USER_ERROR.
    """
    parent = _build_global_parser()

    root_parser = argparse.ArgumentParser(
        prog="envgate",
        description="envgate — environment-compatibility gate for host extensions.",
        parents=[parent],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)

    args = root_parser.parse_args()

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
