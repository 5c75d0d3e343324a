"""Core types for the engine installer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class SequenceMode(str, Enum):
    """How migration filenames are prefixed."""

    TIMESTAMPED = "timestamped"
    COUNTER = "counter"


class ConflictMode(str, Enum):
    """What to do when a migration is already installed."""

    SKIP = "skip"
    ERROR = "error"


class EngineFileKind(str, Enum):
    """Role of a file inside an engine's db directory."""

    MIGRATION = "migration"
    SEED = "seed"


# Engine files ending in one of these are rendered; everything else is copied
TEMPLATE_SUFFIXES = (".j2", ".jinja")


def is_template(path: Path) -> bool:
    """Whether a file opts in to template rendering."""
    return path.suffix in TEMPLATE_SUFFIXES


def rendered_name(path: Path) -> str:
    """Filename once installed, without any template suffix."""
    if is_template(path):
        return path.stem
    return path.name


@dataclass(frozen=True)
class EngineFile:
    """A file discovered under an engine's db directory."""

    path: Path
    kind: EngineFileKind

    @property
    def name(self) -> str:
        return rendered_name(self.path)

    @property
    def is_template(self) -> bool:
        return is_template(self.path)


@dataclass
class InstalledFile:
    """A file written (or planned) into the host application."""

    source: Path
    destination: Path
    kind: EngineFileKind
    sequence: str | None = None


@dataclass
class SkippedFile:
    """A file left untouched, with the reason."""

    source: Path
    destination: Path
    reason: str


@dataclass
class InstallResult:
    """Outcome of one installer run."""

    engine_name: str
    migrations: list[InstalledFile] = field(default_factory=list)
    seeds: list[InstalledFile] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    dry_run: bool = False

    @property
    def installed_count(self) -> int:
        return len(self.migrations) + len(self.seeds)
