"""Migration numbering command for the engine installer CLI."""

import argparse
from datetime import datetime, timezone
from pathlib import Path

from ...core.config import Config
from ...core.types import SequenceMode
from ...migrations.paths import list_migration_names
from ...migrations.sequencer import next_sequence


def add_mode_arguments(parser: argparse.ArgumentParser) -> None:
    """Add --counter / --timestamped flags to a parser."""
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--counter",
        dest="sequence_mode",
        action="store_const",
        const=SequenceMode.COUNTER,
        help="Number migrations 001, 002, ...",
    )
    group.add_argument(
        "--timestamped",
        dest="sequence_mode",
        action="store_const",
        const=SequenceMode.TIMESTAMPED,
        help="Number migrations with UTC timestamps (default)",
    )


def apply_mode(args, config: Config) -> None:
    """Override the configured numbering mode from parsed flags."""
    mode = getattr(args, "sequence_mode", None)
    if mode is not None:
        config.sequence_mode = mode


def add_next_number_arguments(parser: argparse.ArgumentParser) -> None:
    """Add next-number command arguments to a parser."""
    parser.add_argument(
        "directory",
        nargs="?",
        help="Migration directory (default: configured host migrations directory)",
    )
    add_mode_arguments(parser)


def handle_next_number(args, config: Config) -> None:
    """Handle next-number command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    apply_mode(args, config)
    directory = Path(args.directory) if args.directory else config.migrations_path
    listing = list_migration_names(directory)
    print(next_sequence(listing, config.sequence_mode, datetime.now(timezone.utc)))
