"""Title heuristics for anime release names.

Release titles are free text written by many groups. These helpers cover
the common conventions and return -1/False instead of guessing when a title
is ambiguous:

- ``is_batch``: whole-word "batch", "complete", "pack" or "collection"
  (case-insensitive), or an episode range such as "01-12" / "01~12".
- ``parse_episode_number``: a 1-4 digit number after " - ", "[" or "(",
  optionally followed by a "vN" revision, and then whitespace, "]", ")" or
  "END". Batches never have an episode number.
- ``format_name``: appends informational tags, never twice.
"""

import re
from typing import NamedTuple

from toshokan.search.parsing import parse_resolution

# =============================================================================
# Patterns
# =============================================================================

BATCH_KEYWORD_PATTERN = re.compile(r"\b(?:batch|complete|pack|collection)\b", re.IGNORECASE)
EPISODE_RANGE_PATTERN = re.compile(r"\b\d{1,3}[~-]\d{1,3}\b")
EPISODE_PATTERN = re.compile(r"(?: - |\[|\()(\d{1,4})(?:v\d+)?(?=\s|\]|\)|END)")

ENGLISH_AUDIO_PATTERN = re.compile(r"\[ENG\]", re.IGNORECASE)
LANGUAGE_TOKEN_PATTERN = re.compile(r"\[(?:[A-Z]{2,3}|[A-Z]{2}-[A-Z]{2})\]")

TAG_DUAL_AUDIO = "[Dual Audio]"
TAG_MULTI_SUBS = "[Multi Subs]"
TAG_MULTIPLE_LANGUAGES = "[Multiple Languages]"


class TitleInfo(NamedTuple):
    """Metadata inferred from a release title."""

    resolution: str
    episode_number: int
    is_batch: bool


# =============================================================================
# Episode / batch detection
# =============================================================================


def is_batch(title: str) -> bool:
    """Check whether a title describes a batch, pack or episode range."""
    return bool(BATCH_KEYWORD_PATTERN.search(title) or EPISODE_RANGE_PATTERN.search(title))


def parse_episode_number(title: str) -> int:
    """Extract the episode number of a single-episode release.

    Args:
        title: Release title, e.g. "[Group] Show - 07 [1080p]".

    Returns:
        The first matching episode number, or -1 for batches and titles
        without a recognisable number.
    """
    if is_batch(title):
        return -1

    match = EPISODE_PATTERN.search(title)
    return int(match.group(1)) if match else -1


def analyze_title(title: str) -> TitleInfo:
    """Run every title heuristic once."""
    batch = is_batch(title)
    return TitleInfo(
        resolution=parse_resolution(title),
        episode_number=-1 if batch else parse_episode_number(title),
        is_batch=batch,
    )


# =============================================================================
# Name formatting
# =============================================================================


def format_name(title: str) -> str:
    """Append informational tags to a release title.

    Tags are checked independently and appended in a fixed order:
    "[Dual Audio]" for English-audio releases that are not raws,
    "[Multi Subs]" for "multiple subtitle" releases and
    "[Multiple Languages]" when more than two language tokens such as
    "[JPN]" or "[PT-BR]" appear. A tag already present (in any case) is not
    appended again, so ``format_name`` is idempotent.

    Args:
        title: Release title as listed on the site.

    Returns:
        The title with any applicable tags appended.
    """
    name = title
    lower = name.lower()

    if ENGLISH_AUDIO_PATTERN.search(name) and "raw" not in lower and "dual audio" not in lower:
        name = f"{name} {TAG_DUAL_AUDIO}"

    if "multiple subtitle" in lower and "multi subs" not in lower:
        name = f"{name} {TAG_MULTI_SUBS}"

    if (
        len(LANGUAGE_TOKEN_PATTERN.findall(title)) > 2
        and "multiple languages" not in lower
    ):
        name = f"{name} {TAG_MULTIPLE_LANGUAGES}"

    return name
