"""Migration numbering and path rewriting.

Example:
    from engine_installer.migrations import next_sequence, destination_name

    sequence = next_sequence(listing, SequenceMode.COUNTER, now)
    name = destination_name("create_pages.py", sequence)
"""

from .paths import list_migration_names, migration_destination, seed_destination
from .sequencer import (
    current_migration_number,
    destination_name,
    find_installed,
    format_timestamp,
    next_sequence,
    parse_sequence,
    sequence_batch,
    strip_sequence,
)

__all__ = [
    "next_sequence",
    "current_migration_number",
    "destination_name",
    "find_installed",
    "format_timestamp",
    "parse_sequence",
    "strip_sequence",
    "sequence_batch",
    "list_migration_names",
    "migration_destination",
    "seed_destination",
]
