"""Tokyo Toshokan torrent provider for anime aggregation hosts."""

__version__ = "0.1.0"
