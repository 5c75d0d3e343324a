"""Command implementations for the engine installer CLI."""

from .install import add_install_arguments, handle_install
from .sequence import add_next_number_arguments, handle_next_number

__all__ = [
    "add_install_arguments",
    "handle_install",
    "add_next_number_arguments",
    "handle_next_number",
]
