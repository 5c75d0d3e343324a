"""Migration sequence numbering.

Assigns each migration copied into a host project a sequence prefix that
is strictly greater than every prefix already present, in either of the
two numbering modes:

    counter:      001_create_pages.py, 002_add_slug.py, ...
    timestamped:  20240131120000_create_pages.py, ...

Every function here is pure. The caller passes in the directory listing
and the current instant, so repeated calls with the same inputs give the
same answer and nothing reads the system clock.

Example:
    from datetime import datetime, timezone
    from engine_installer.core.types import SequenceMode
    from engine_installer.migrations.sequencer import next_sequence

    listing = ["001_create_pages.py", "002_add_slug.py"]
    next_sequence(listing, SequenceMode.COUNTER, datetime.now(timezone.utc))
    # -> "003"
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Iterable

from ..core.types import SequenceMode

# Filenames like "003_create_pages.py" or "20240131120000_add_slug.sql"
PREFIX_PATTERN = re.compile(r"^(?P<sequence>\d+)(?P<rest>_.*)$")

COUNTER_WIDTH = 3
TIMESTAMP_WIDTH = 14
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def parse_sequence(filename: str) -> str | None:
    """Return the sequence prefix of a filename, or None if it has none."""
    match = PREFIX_PATTERN.match(PurePath(filename).name)
    if match is None:
        return None
    return match.group("sequence")


def strip_sequence(filename: str) -> str:
    """Return the filename without its sequence prefix and separator.

    Names without a prefix come back unchanged.
    """
    name = PurePath(filename).name
    match = PREFIX_PATTERN.match(name)
    if match is None:
        return name
    return match.group("rest")[1:]


def _max_prefix(directory_listing: Iterable[str]) -> tuple[int, int]:
    """Largest prefix value in the listing and the width it was written with.

    Returns (0, 0) when nothing in the listing carries a prefix.
    """
    best_value = 0
    best_width = 0
    for filename in directory_listing:
        prefix = parse_sequence(filename)
        if prefix is None:
            continue
        value = int(prefix)
        if value > best_value or (value == best_value and len(prefix) > best_width):
            best_value = value
            best_width = len(prefix)
    return best_value, best_width


def current_migration_number(directory_listing: Iterable[str]) -> int:
    """Highest numeric prefix in the listing, or 0 if there is none."""
    value, _ = _max_prefix(directory_listing)
    return value


def format_timestamp(current_time: datetime) -> str:
    """Format an instant as a 14-digit UTC timestamp.

    Naive datetimes are taken to be UTC already.
    """
    if current_time.tzinfo is not None:
        current_time = current_time.astimezone(timezone.utc)
    return current_time.strftime(TIMESTAMP_FORMAT)


def next_sequence(
    directory_listing: Iterable[str],
    mode: SequenceMode | str,
    current_time: datetime,
) -> str:
    """Compute the next sequence prefix for a migration directory.

    Counter mode increments the highest existing prefix and zero-pads it to
    three digits, or to the width the highest prefix was already written
    with if that is wider.

    Timestamped mode uses the formatted current time, unless the directory
    already holds a prefix at or past that instant (clock skew, or several
    migrations within one second); then it uses the highest prefix plus one,
    padded to 14 digits.

    Args:
        directory_listing: Filenames already in the target directory.
            Names without a numeric prefix are ignored.
        mode: Numbering mode.
        current_time: Instant to use for timestamped numbering.

    Returns:
        A prefix strictly greater than every prefix in the listing.
    """
    mode = SequenceMode(mode)
    value, width = _max_prefix(directory_listing)
    following = value + 1

    if mode is SequenceMode.TIMESTAMPED:
        stamp = int(format_timestamp(current_time))
        return f"{max(stamp, following):0{TIMESTAMP_WIDTH}d}"

    return f"{following:0{max(COUNTER_WIDTH, width)}d}"


def destination_name(source_name: str, sequence: str) -> str:
    """Build the destination filename for a migration.

    A leading sequence prefix on the source name is replaced; otherwise the
    sequence and an underscore are prepended. The rest of the name,
    extension included, is kept verbatim.
    """
    name = PurePath(source_name).name
    match = PREFIX_PATTERN.match(name)
    if match is None:
        return f"{sequence}_{name}"
    return f"{sequence}{match.group('rest')}"


def find_installed(directory_listing: Iterable[str], source_name: str) -> str | None:
    """Find an already sequenced file carrying the same descriptive name.

    Args:
        directory_listing: Filenames in the host migration directory.
        source_name: Filename of the migration about to be installed.

    Returns:
        The matching filename from the listing, or None.
    """
    wanted = strip_sequence(source_name)
    for filename in directory_listing:
        if parse_sequence(filename) is None:
            continue
        if strip_sequence(filename) == wanted:
            return PurePath(filename).name
    return None


def sequence_batch(
    directory_listing: Iterable[str],
    source_names: Iterable[str],
    mode: SequenceMode | str,
    current_time: datetime,
) -> list[str]:
    """Name several migrations in one go.

    Each assigned name is added to the working listing before the next one
    is computed, so the results carry strictly increasing prefixes.

    Returns:
        Destination filenames, in the order of ``source_names``.
    """
    listing = list(directory_listing)
    assigned: list[str] = []
    for source_name in source_names:
        sequence = next_sequence(listing, mode, current_time)
        name = destination_name(source_name, sequence)
        listing.append(name)
        assigned.append(name)
    return assigned
