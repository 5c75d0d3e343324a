"""Path helpers for moving engine files into a host project."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from ..core.types import rendered_name
from .sequencer import destination_name


def list_migration_names(directory: Path) -> list[str]:
    """List filenames in a migration directory.

    Args:
        directory: Host migration directory.

    Returns:
        Sorted filenames, or an empty list if the directory does not exist.
    """
    if not directory.is_dir():
        logger.debug(f"Migration directory does not exist yet: {directory}")
        return []
    return sorted(entry.name for entry in directory.iterdir() if entry.is_file())


def migration_destination(
    source: Path,
    sequence: str,
    app_root: Path,
    migrations_dir: str = "db/migrate",
) -> Path:
    """Rewrite an engine migration path to its sequenced host path.

    Args:
        source: Engine migration file (e.g. engine/db/migrate/create_pages.py);
            a template suffix such as .j2 is dropped.
        sequence: Prefix assigned by the sequencer.
        app_root: Host application root.
        migrations_dir: Host migration directory relative to app_root.

    Returns:
        Destination path such as app/db/migrate/003_create_pages.py.
    """
    return app_root / migrations_dir / destination_name(rendered_name(source), sequence)


def seed_destination(source: Path, engine_root: Path, app_root: Path) -> Path:
    """Rewrite an engine seed path to the same place under the host db directory.

    Args:
        source: Seed file under engine_root/db.
        engine_root: Engine root directory.
        app_root: Host application root.

    Returns:
        app_root/db/<path relative to engine db directory>.
    """
    relative = source.relative_to(engine_root / "db").with_name(rendered_name(source))
    return app_root / "db" / relative
