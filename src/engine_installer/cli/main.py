"""CLI entry point for the engine installer."""

import argparse
import sys
from typing import NoReturn

from ..core.config import Config
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="engine-install",
        description="Copy an engine's migrations and seeds into a host project",
    )
    parser.add_argument("-v", "--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument(
        "-c",
        "--config",
        help="TOML config file (default: $ENGINE_INSTALLER_CONFIG)",
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    install_parser = subparsers.add_parser(
        "install", help="Install an engine's migrations and seeds"
    )
    commands.add_install_arguments(install_parser)

    number_parser = subparsers.add_parser(
        "next-number", help="Print the next migration number for a directory"
    )
    commands.add_next_number_arguments(number_parser)

    return parser


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env_or_file(args.config)

        if args.command == "install":
            commands.handle_install(args, config)
        elif args.command == "next-number":
            commands.handle_next_number(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
