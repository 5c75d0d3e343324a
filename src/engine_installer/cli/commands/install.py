"""Install command for the engine installer CLI."""

import argparse
from pathlib import Path

from ...core.config import Config
from ...core.exceptions import MaterializeError, MigrationExistsError
from ...core.types import ConflictMode, InstallResult
from ...installer import EngineInstaller
from .sequence import add_mode_arguments, apply_mode


def add_install_arguments(parser: argparse.ArgumentParser) -> None:
    """Add install command arguments to a parser."""
    parser.add_argument("engine_root", help="Engine directory containing db/")
    parser.add_argument(
        "--app-root",
        help="Host application root (default: current directory)",
    )
    parser.add_argument("--name", help="Engine name (default: directory name)")
    add_mode_arguments(parser)
    parser.add_argument(
        "--on-conflict",
        choices=[mode.value for mode in ConflictMode],
        help="What to do when a migration is already installed (default: skip)",
    )
    parser.add_argument(
        "--force-seeds",
        action="store_true",
        help="Overwrite seed files that already exist",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be installed without writing files",
    )


def handle_install(args, config: Config) -> None:
    """Handle install command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.

    Raises:
        Various installer exceptions.
    """
    apply_mode(args, config)
    if args.app_root:
        config.app_root = Path(args.app_root)
    if args.on_conflict:
        config.on_conflict = ConflictMode(args.on_conflict)
    if args.force_seeds:
        config.overwrite_seeds = True

    installer = EngineInstaller(config, Path(args.engine_root), engine_name=args.name)

    try:
        result = installer.install(dry_run=args.dry_run)
    except MigrationExistsError as e:
        print(f"✗ {e}")
        raise
    except MaterializeError as e:
        if e.result is not None:
            _print_result(e.result, config.app_root)
        print(f"✗ {e}")
        raise

    _print_result(result, config.app_root)

    if result.migrations and not result.dry_run:
        print(installer.post_install_message())


def _relative(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def _print_result(result: InstallResult, app_root: Path) -> None:
    """Print installed and skipped files.

    Args:
        result: InstallResult from the installer.
        app_root: Host root used to shorten paths.
    """
    verb = "Would create" if result.dry_run else "Created"

    for installed in result.migrations:
        print(f"✓ {verb} migration {_relative(installed.destination, app_root)}")
    for installed in result.seeds:
        print(f"✓ {verb} seed {_relative(installed.destination, app_root)}")
    for skipped in result.skipped:
        print(f"- Skipped {_relative(skipped.destination, app_root)} ({skipped.reason})")

    if not result.installed_count and not result.skipped:
        print(f"Nothing to install from '{result.engine_name}'.")
