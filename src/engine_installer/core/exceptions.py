"""Custom exceptions for the engine installer."""

from pathlib import Path


class InstallerError(Exception):
    """Base exception for all installer errors."""

    pass


class ConfigError(InstallerError):
    """Configuration value is invalid or unreadable."""

    pass


class EngineNotFoundError(InstallerError):
    """Engine root or its db directory does not exist."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"Engine not found: {path}")


class MigrationExistsError(InstallerError):
    """A migration with the same name is already installed."""

    def __init__(self, name: str, existing: str):
        """Initialize exception with the conflicting names.

        Args:
            name: Descriptive name of the migration being installed.
            existing: Filename of the already installed migration.
        """
        self.name = name
        self.existing = existing
        super().__init__(f"Another migration is already named {name}: {existing}")


class MaterializeError(InstallerError):
    """Rendering or writing a file failed.

    When raised from an install run, ``result`` holds what had already been
    written before the failure.
    """

    result = None
