"""Discovery of installable files inside an engine.

An engine keeps its database files under ``db/``:

    engine/
        db/
            migrate/
                create_pages.py.j2   -> migration, rendered with Jinja2
                add_slug.py          -> migration, copied as is
            seeds/
                pages.py             -> seed
            seeds.py                 -> seed

Migrations whose filename already starts with a digit are treated as
installed copies rather than engine sources, and are left alone.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from loguru import logger

from ..core.exceptions import EngineNotFoundError
from ..core.types import EngineFile, EngineFileKind, rendered_name

DEFAULT_EXTENSIONS = (".py", ".sql", ".rb")


def classify(relative_path: Path) -> EngineFileKind | None:
    """Classify a path relative to the engine's db directory.

    Args:
        relative_path: Path below engine/db, e.g. ``migrate/create_pages.py``.

    Returns:
        The file kind, or None if the file is not installable.
    """
    parts = relative_path.parts
    if "migrate" in parts[:-1]:
        if relative_path.name[:1].isdigit():
            return None
        return EngineFileKind.MIGRATION
    if "seeds" in relative_path.as_posix():
        return EngineFileKind.SEED
    return None


def engine_db_dir(engine_root: Path) -> Path:
    """Return the engine's db directory.

    Raises:
        EngineNotFoundError: If the engine root or its db directory is missing.
    """
    if not engine_root.is_dir():
        raise EngineNotFoundError(engine_root)
    db_dir = engine_root / "db"
    if not db_dir.is_dir():
        raise EngineNotFoundError(db_dir)
    return db_dir


def discover_engine_files(
    engine_root: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> Iterator[EngineFile]:
    """Yield installable files under engine_root/db, sorted by path.

    Args:
        engine_root: Root directory of the engine package.
        extensions: File suffixes to consider, ignoring any template suffix.

    Yields:
        EngineFile for every migration template and seed file.

    Raises:
        EngineNotFoundError: If the engine root or its db directory is missing.
    """
    db_dir = engine_db_dir(engine_root)
    suffixes = set(extensions)

    for file_path in sorted(db_dir.rglob("*")):
        if not file_path.is_file():
            continue
        # create_pages.py.j2 counts as a .py file
        if Path(rendered_name(file_path)).suffix not in suffixes:
            continue

        relative = file_path.relative_to(db_dir)
        kind = classify(relative)
        if kind is None:
            logger.debug(f"Ignoring engine file: {relative}")
            continue

        yield EngineFile(path=file_path, kind=kind)
