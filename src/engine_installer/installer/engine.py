"""Engine installer.

Copies an engine's migrations and seeds into a host project. Each migration
gets a fresh sequence prefix from the sequencer; names assigned earlier in
the same run are fed back into the listing so a batch never collides, even
in dry-run mode where nothing reaches the disk.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from loguru import logger

from ..core.config import Config
from ..core.exceptions import MaterializeError, MigrationExistsError
from ..core.types import (
    ConflictMode,
    EngineFile,
    EngineFileKind,
    InstalledFile,
    InstallResult,
    SkippedFile,
)
from ..migrations.paths import list_migration_names, migration_destination, seed_destination
from ..migrations.sequencer import find_installed, next_sequence, strip_sequence
from ..sources.discovery import discover_engine_files
from .materializer import FileMaterializer


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EngineInstaller:
    """Installs one engine's db files into the configured host project.

    Example:
        installer = EngineInstaller(Config.from_env(), Path("vendor/engines/blog"))
        result = installer.install()
        print(installer.post_install_message())
    """

    def __init__(
        self,
        config: Config,
        engine_root: Path,
        engine_name: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the installer.

        Args:
            config: Installer configuration (host root, numbering mode, ...).
            engine_root: Root directory of the engine package.
            engine_name: Name exposed to templates; defaults to the directory name.
            clock: Returns the current UTC instant; injectable for tests.
        """
        self.config = config
        self.engine_root = Path(engine_root).resolve()
        self.engine_name = engine_name or self.engine_root.name
        self.clock = clock or _utc_now
        self.materializer = FileMaterializer(
            self.engine_root, {"engine_name": self.engine_name}
        )

    def install(self, dry_run: bool = False) -> InstallResult:
        """Install all migrations, then all seeds.

        Args:
            dry_run: Compute destinations without writing anything.

        Returns:
            InstallResult describing installed and skipped files.

        Raises:
            EngineNotFoundError: If the engine has no db directory.
            MigrationExistsError: On a name clash when on_conflict is "error".
            MaterializeError: If a file cannot be rendered or written.
        """
        result = InstallResult(engine_name=self.engine_name, dry_run=dry_run)

        files = list(discover_engine_files(self.engine_root, self.config.extensions))
        migrations = [f for f in files if f.kind is EngineFileKind.MIGRATION]
        seeds = [f for f in files if f.kind is EngineFileKind.SEED]

        logger.debug(
            f"Engine '{self.engine_name}': {len(migrations)} migration(s), "
            f"{len(seeds)} seed file(s)"
        )

        planned: list[str] = []
        try:
            for engine_file in migrations:
                self._install_migration(engine_file, planned, result)

            for engine_file in seeds:
                self._install_seed(engine_file, result)
        except MaterializeError as e:
            written = [f.destination for f in result.migrations + result.seeds]
            logger.error(
                f"Install of '{self.engine_name}' stopped after {len(written)} "
                f"file(s): {e}"
            )
            for path in written:
                logger.error(f"  already written: {path}")
            e.result = result
            raise

        logger.info(
            f"{'Planned' if dry_run else 'Installed'} {len(result.migrations)} "
            f"migration(s) and {len(result.seeds)} seed file(s) from "
            f"'{self.engine_name}', skipped {len(result.skipped)}"
        )
        return result

    def _install_migration(
        self,
        engine_file: EngineFile,
        planned: list[str],
        result: InstallResult,
    ) -> None:
        migrations_path = self.config.migrations_path
        # Re-read on every call; planned covers names not yet on disk
        listing = list_migration_names(migrations_path) + planned

        existing = find_installed(listing, engine_file.name)
        if existing is not None:
            if self.config.on_conflict is ConflictMode.ERROR:
                raise MigrationExistsError(strip_sequence(engine_file.name), existing)
            logger.warning(f"Skipping {engine_file.name}: already installed as {existing}")
            result.skipped.append(
                SkippedFile(
                    source=engine_file.path,
                    destination=migrations_path / existing,
                    reason="already installed",
                )
            )
            return

        sequence = next_sequence(listing, self.config.sequence_mode, self.clock())
        destination = migration_destination(
            engine_file.path,
            sequence,
            self.config.app_root,
            self.config.migrations_dir,
        )

        if not result.dry_run:
            self.materializer.write(
                engine_file.path,
                destination,
                migration_number=sequence,
                migration_name=strip_sequence(engine_file.name),
            )

        planned.append(destination.name)
        result.migrations.append(
            InstalledFile(
                source=engine_file.path,
                destination=destination,
                kind=EngineFileKind.MIGRATION,
                sequence=sequence,
            )
        )
        logger.info(f"Migration {engine_file.name} -> {destination.name}")

    def _install_seed(self, engine_file: EngineFile, result: InstallResult) -> None:
        destination = seed_destination(
            engine_file.path, self.engine_root, self.config.app_root
        )

        if destination.exists() and not self.config.overwrite_seeds:
            logger.warning(f"Skipping seed {destination}: file exists")
            result.skipped.append(
                SkippedFile(
                    source=engine_file.path,
                    destination=destination,
                    reason="file exists",
                )
            )
            return

        if not result.dry_run:
            self.materializer.write(engine_file.path, destination)

        result.seeds.append(
            InstalledFile(
                source=engine_file.path,
                destination=destination,
                kind=EngineFileKind.SEED,
            )
        )
        logger.info(f"Seed {engine_file.path.name} -> {destination}")

    def post_install_message(self) -> str:
        """Banner telling the user how to apply the new migrations."""
        rule = "-" * 24
        return "\n".join([rule, "Now run:", self.config.migrate_command, rule])
