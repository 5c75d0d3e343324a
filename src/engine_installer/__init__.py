"""Engine installer - copy engine migrations and seeds into a host project."""

from .core.config import Config
from .core.types import SequenceMode
from .installer import EngineInstaller
from .migrations import destination_name, next_sequence

__version__ = "0.1.0"

__all__ = [
    "Config",
    "SequenceMode",
    "EngineInstaller",
    "next_sequence",
    "destination_name",
]
