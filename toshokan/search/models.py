"""Data models exchanged with the aggregation host.

Attributes are snake_case in Python; the host schema is camelCase, so every
model serializes with camelCase aliases (``model_dump(by_alias=True)``) and
accepts either spelling on input.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ProviderVariant(str, Enum):
    """Provider flavours sharing one parser."""

    BASIC = "anime"  # Anime-only keyword search, no title heuristics
    FULL = "full"  # Title heuristics, name tags and smart search


class HostModel(BaseModel):
    """Base model using the host's camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TorrentRecord(HostModel):
    """One torrent entry from a Tokyo Toshokan listing page.

    Attributes:
        name: Torrent title, tag-augmented for the full variant.
        date: ISO-8601 UTC instant of the upload, or empty string.
        size: Size in bytes.
        formatted_size: Size exactly as printed on the site.
        seeders: Number of seeders.
        leechers: Number of leechers.
        download_count: Number of completed downloads.
        link: Absolute URL of the details page, or empty string.
        download_url: URL of the .torrent file, or empty string.
        magnet_link: Magnet URI embedded in the listing.
        info_hash: BitTorrent info hash from the magnet URI, or empty string.
        resolution: Resolution token found in the title (e.g. "1080p").
        episode_number: Episode number, -1 when unknown or a batch.
        is_batch: Whether the entry bundles several episodes.
    """

    name: str = Field(..., min_length=1, description="Torrent title")
    date: str = Field(default="", description="ISO-8601 upload instant")
    size: int = Field(default=0, ge=0, description="Size in bytes")
    formatted_size: str = Field(default="", description="Raw size string")
    seeders: int = Field(default=0, ge=0, description="Number of seeders")
    leechers: int = Field(default=0, ge=0, description="Number of leechers")
    download_count: int = Field(default=0, ge=0, description="Completed downloads")
    link: str = Field(default="", description="Details page URL")
    download_url: str = Field(default="", description=".torrent file URL")
    magnet_link: str = Field(..., min_length=1, description="Magnet link")
    info_hash: str = Field(default="", description="Info hash")
    resolution: str = Field(default="", description="Resolution token")
    release_group: str = Field(default="", description="Release group (not derived)")
    is_batch: bool = Field(default=False, description="Batch/collection entry")
    episode_number: int = Field(default=-1, ge=-1, description="Episode number")
    is_best_release: bool = Field(default=False, description="Not derived")
    confirmed: bool = Field(default=False, description="Not derived")

    def to_host_dict(self) -> dict:
        """Serialize with the host's camelCase field names."""
        return self.model_dump(by_alias=True)


class ProviderSettings(HostModel):
    """Capabilities the provider advertises to the host."""

    can_smart_search: bool = False
    smart_search_filters: list[str] = Field(default_factory=list)
    supports_adult: bool = False
    type: str = "main"


class Media(HostModel):
    """Media title a smart search is keyed to."""

    romaji_title: str | None = None
    english_title: str | None = None
    absolute_season_offset: int = Field(default=0, ge=0)

    @field_validator("absolute_season_offset", mode="before")
    @classmethod
    def default_offset(cls, v: int | None) -> int:
        """Treat a missing offset (null from the host) as 0."""
        return 0 if v is None else v


class SmartSearchOptions(HostModel):
    """Options for a smart search targeting one episode of one title."""

    query: str | None = None
    media: Media = Field(default_factory=Media)
    episode_number: int = Field(default=-1)
    batch: bool = False
    resolution: str | None = None
