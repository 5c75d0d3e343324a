"""Configuration management for the engine installer."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigError
from .types import ConflictMode, SequenceMode

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _parse_sequence_mode(value: str) -> SequenceMode:
    try:
        return SequenceMode(value.strip().lower())
    except ValueError:
        raise ConfigError(f"Unknown sequence mode: {value!r}") from None


def _parse_conflict_mode(value: str) -> ConflictMode:
    try:
        return ConflictMode(value.strip().lower())
    except ValueError:
        raise ConfigError(f"Unknown conflict mode: {value!r}") from None


def _expect(data: dict, key: str, kind: type):
    """Return data[key] if it has the given TOML type, else raise ConfigError."""
    value = data[key]
    if not isinstance(value, kind):
        raise ConfigError(
            f"{key} must be a {kind.__name__}, got {type(value).__name__}: {value!r}"
        )
    return value


@dataclass
class Config:
    """Main installer configuration."""

    app_root: Path = field(default_factory=Path.cwd)
    migrations_dir: str = "db/migrate"
    sequence_mode: SequenceMode = SequenceMode.TIMESTAMPED
    on_conflict: ConflictMode = ConflictMode.SKIP
    overwrite_seeds: bool = False
    migrate_command: str = "alembic upgrade head"
    # File suffixes picked up from an engine's db directory
    extensions: tuple[str, ...] = (".py", ".sql", ".rb")

    @property
    def migrations_path(self) -> Path:
        """Absolute host directory that receives migrations."""
        return self.app_root / self.migrations_dir

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path | str) -> "Config":
        """Load configuration from a TOML file, then apply env overrides.

        Args:
            path: Path to the TOML file.

        Returns:
            Config with file values applied and environment taking precedence.

        Raises:
            ConfigError: If the file cannot be read or holds invalid values.
        """
        path = Path(path)
        try:
            with path.open("rb") as fh:
                data = tomllib.load(fh)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        config = cls()
        config._apply_mapping(data)
        config._apply_env()
        return config

    @classmethod
    def from_env_or_file(cls, path: Path | str | None = None) -> "Config":
        """Load from an explicit file, ENGINE_INSTALLER_CONFIG, or env only."""
        if path is None:
            path = os.environ.get("ENGINE_INSTALLER_CONFIG")
        if path:
            return cls.from_file(path)
        return cls.from_env()

    def _apply_mapping(self, data: dict) -> None:
        if "app_root" in data:
            self.app_root = Path(_expect(data, "app_root", str))
        if "migrations_dir" in data:
            self.migrations_dir = _expect(data, "migrations_dir", str)
        if "sequence_mode" in data:
            self.sequence_mode = _parse_sequence_mode(_expect(data, "sequence_mode", str))
        if "on_conflict" in data:
            self.on_conflict = _parse_conflict_mode(_expect(data, "on_conflict", str))
        if "overwrite_seeds" in data:
            self.overwrite_seeds = _expect(data, "overwrite_seeds", bool)
        if "migrate_command" in data:
            self.migrate_command = _expect(data, "migrate_command", str)
        if "extensions" in data:
            extensions = _expect(data, "extensions", list)
            if not all(isinstance(ext, str) and ext for ext in extensions):
                raise ConfigError("extensions must be a list of non-empty strings")
            self.extensions = tuple(
                ext if ext.startswith(".") else f".{ext}" for ext in extensions
            )

    def _apply_env(self) -> None:
        if path := os.environ.get("ENGINE_INSTALLER_APP_ROOT"):
            self.app_root = Path(path)

        if migrations_dir := os.environ.get("ENGINE_INSTALLER_MIGRATIONS_DIR"):
            self.migrations_dir = migrations_dir

        if mode := os.environ.get("ENGINE_INSTALLER_SEQUENCE_MODE"):
            self.sequence_mode = _parse_sequence_mode(mode)

        if conflict := os.environ.get("ENGINE_INSTALLER_ON_CONFLICT"):
            self.on_conflict = _parse_conflict_mode(conflict)

        if overwrite := os.environ.get("ENGINE_INSTALLER_OVERWRITE_SEEDS"):
            self.overwrite_seeds = overwrite.strip().lower() in _TRUE_VALUES

        if command := os.environ.get("ENGINE_INSTALLER_MIGRATE_COMMAND"):
            self.migrate_command = command
