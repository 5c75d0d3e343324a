"""Core configuration, errors and types for the engine installer."""

from .config import Config
from .exceptions import (
    ConfigError,
    EngineNotFoundError,
    InstallerError,
    MaterializeError,
    MigrationExistsError,
)
from .types import (
    ConflictMode,
    EngineFile,
    EngineFileKind,
    InstalledFile,
    InstallResult,
    SequenceMode,
    SkippedFile,
)

__all__ = [
    "Config",
    "InstallerError",
    "ConfigError",
    "EngineNotFoundError",
    "MigrationExistsError",
    "MaterializeError",
    "SequenceMode",
    "ConflictMode",
    "EngineFileKind",
    "EngineFile",
    "InstalledFile",
    "SkippedFile",
    "InstallResult",
]
