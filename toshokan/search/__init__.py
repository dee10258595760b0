"""Search module for the Tokyo Toshokan torrent index.

This module provides an async client that scrapes Tokyo Toshokan listings
into structured torrent records, plus the title heuristics and smart-search
filtering applied to them.
"""

from toshokan.search.models import (
    Media,
    ProviderSettings,
    ProviderVariant,
    SmartSearchOptions,
    TorrentRecord,
)
from toshokan.search.tokyotosho import (
    TokyoToshokanClient,
    TokyoToshokanError,
    TokyoToshokanHTTPError,
    TokyoToshokanUnavailableError,
    get_latest_tokyotosho,
    parse_listing,
    search_tokyotosho,
    smart_search_tokyotosho,
)

__all__ = [
    # Models
    "Media",
    "ProviderSettings",
    "ProviderVariant",
    "SmartSearchOptions",
    "TorrentRecord",
    # Tokyo Toshokan
    "TokyoToshokanClient",
    "TokyoToshokanError",
    "TokyoToshokanHTTPError",
    "TokyoToshokanUnavailableError",
    "get_latest_tokyotosho",
    "parse_listing",
    "search_tokyotosho",
    "smart_search_tokyotosho",
]
