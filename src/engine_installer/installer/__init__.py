"""Installation of engine migrations and seeds into a host project."""

from .engine import EngineInstaller
from .materializer import FileMaterializer

__all__ = [
    "EngineInstaller",
    "FileMaterializer",
]
