"""Field extractors for Tokyo Toshokan listing text.

Pure functions turning the free-text fragments of a listing entry into typed
values. None of them raise on bad input: each has a default (0 or empty
string) so a single odd field never drops the entry.
"""

import re
from datetime import UTC, datetime
from typing import NamedTuple

# =============================================================================
# Patterns
# =============================================================================

# "Size: 75.63MB" and "Date: 2024-01-15 12:30 UTC" in the bottom row
SIZE_FIELD_PATTERN = re.compile(r"Size:\s*([\d.]+\s*\w+)")
DATE_FIELD_PATTERN = re.compile(r"Date:\s*(.+?UTC)", re.DOTALL)

SIZE_PATTERN = re.compile(r"([\d.]+)\s*(GB|MB|KB)", re.IGNORECASE)
SIZE_MULTIPLIERS = {
    "KB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
}

SEEDERS_PATTERN = re.compile(r"S:\s*(\d+)")
LEECHERS_PATTERN = re.compile(r"L:\s*(\d+)")
COMPLETED_PATTERN = re.compile(r"C:\s*(\d+)")

INFO_HASH_PATTERN = re.compile(r"btih:([a-zA-Z0-9]+)")
RESOLUTION_PATTERN = re.compile(r"\b(\d{3,4}p)\b", re.IGNORECASE)

# Formats the site has used for the "Date:" field, without the UTC suffix
DATE_FORMATS = (
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
)


class TorrentStats(NamedTuple):
    """Seeder/leecher/completed counters of one entry."""

    seeders: int
    leechers: int
    completed: int


# =============================================================================
# Extractors
# =============================================================================


def extract_size_text(description: str) -> str:
    """Return the raw size substring of a description, or "0"."""
    match = SIZE_FIELD_PATTERN.search(description)
    return match.group(1) if match else "0"


def extract_date_text(description: str) -> str:
    """Return the raw "... UTC" date substring of a description, or ""."""
    match = DATE_FIELD_PATTERN.search(description)
    return match.group(1) if match else ""


def parse_size(size_str: str) -> int:
    """Parse a size string into bytes.

    Units are binary multiples (1 KB = 1024 bytes) and the result is rounded
    to the nearest byte.

    Args:
        size_str: Size string from the listing (e.g., "75.63MB", "1 GB").

    Returns:
        Size in bytes, 0 if the string does not contain a known size.
    """
    match = SIZE_PATTERN.search(size_str)
    if not match:
        return 0

    try:
        number = float(match.group(1))
    except ValueError:
        # e.g. "1.2.3MB"
        return 0

    return round(number * SIZE_MULTIPLIERS[match.group(2).upper()])


def parse_date(date_str: str) -> str:
    """Convert a UTC-labelled site date into an ISO-8601 instant.

    The "UTC" suffix is authoritative: the timestamp is never interpreted in
    local time.

    Args:
        date_str: Date string like "2024-01-15 12:30 UTC".

    Returns:
        ISO-8601 string like "2024-01-15T12:30:00.000Z", or "" when the
        input is empty or not in a known format.
    """
    text = date_str.strip()
    if not text:
        return ""

    text = re.sub(r"\s*UTC$", "", text, flags=re.IGNORECASE)

    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt).replace(tzinfo=UTC)
        except ValueError:
            continue
        return parsed.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    return ""


def parse_stats(stats_str: str) -> TorrentStats:
    """Parse the "S: 12 L: 3 C: 500" stats cell.

    Each counter is matched independently and defaults to 0.
    """

    def _counter(pattern: re.Pattern[str]) -> int:
        match = pattern.search(stats_str)
        return int(match.group(1)) if match else 0

    return TorrentStats(
        seeders=_counter(SEEDERS_PATTERN),
        leechers=_counter(LEECHERS_PATTERN),
        completed=_counter(COMPLETED_PATTERN),
    )


def extract_info_hash(magnet: str) -> str:
    """Extract the info hash following ``btih:`` in a magnet URI.

    Args:
        magnet: Magnet link.

    Returns:
        The hash exactly as written in the URI, or "" if absent.
    """
    match = INFO_HASH_PATTERN.search(magnet)
    return match.group(1) if match else ""


def parse_resolution(title: str) -> str:
    """Return the first "720p"-style token of a title, case preserved."""
    match = RESOLUTION_PATTERN.search(title)
    return match.group(1) if match else ""
