"""Engine file discovery."""

from .discovery import DEFAULT_EXTENSIONS, classify, discover_engine_files, engine_db_dir

__all__ = [
    "DEFAULT_EXTENSIONS",
    "classify",
    "discover_engine_files",
    "engine_db_dir",
]
