"""Smart-search query building and result filtering."""

import re
from collections.abc import Iterable

from toshokan.search.models import SmartSearchOptions, TorrentRecord

# Tokyo Toshokan listing types ("type" query parameter)
CATEGORY_ANIME = 1
CATEGORY_BATCH = 11


def build_smart_query(options: SmartSearchOptions) -> str:
    """Pick the search terms: explicit query, then romaji, then English title."""
    for candidate in (
        options.query,
        options.media.romaji_title,
        options.media.english_title,
    ):
        if candidate and candidate.strip():
            return candidate.strip()
    return ""


def category_for(batch: bool) -> int:
    """Return the listing type to search for per-episode or batch releases."""
    return CATEGORY_BATCH if batch else CATEGORY_ANIME


def normalize_resolution(value: str) -> str:
    """Drop a trailing "p" so "1080p" and "1080" compare equal."""
    return re.sub(r"p$", "", value.strip(), flags=re.IGNORECASE).lower()


def filter_smart_results(
    records: Iterable[TorrentRecord],
    options: SmartSearchOptions,
) -> list[TorrentRecord]:
    """Restrict a parsed listing to what a smart search asked for.

    Batch searches keep only batch entries and apply nothing else. Episode
    searches drop batches and entries without an episode number, then keep
    entries numbered either ``episode_number`` or, for long-running series
    using absolute numbering, ``absolute_season_offset + episode_number``.
    A resolution, when given, is matched ignoring a trailing "p".

    Args:
        records: Parsed listing in site order.
        options: Smart search options from the host.

    Returns:
        Matching records, site order preserved.
    """
    if options.batch:
        return [r for r in records if r.is_batch]

    wanted = {
        options.episode_number,
        options.media.absolute_season_offset + options.episode_number,
    }
    results = [
        r
        for r in records
        if not r.is_batch and r.episode_number != -1 and r.episode_number in wanted
    ]

    if options.resolution:
        target = normalize_resolution(options.resolution)
        results = [r for r in results if normalize_resolution(r.resolution) == target]

    return results
