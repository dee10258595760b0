"""Tokyo Toshokan torrent index client.

Provides async search, latest-listing and smart-search functionality for
tokyotosho.info. The site lists every torrent as two adjacent table rows:
the top row holds the title cell (title and magnet anchors) and a details
link, the bottom row holds the size/date description and the stats cell.

Magnet links are embedded in the listing, so no detail page is ever fetched.
"""

import httpx
from bs4 import BeautifulSoup, Tag

from toshokan.config import settings
from toshokan.logger import get_logger
from toshokan.search.filters import (
    CATEGORY_ANIME,
    build_smart_query,
    category_for,
    filter_smart_results,
)
from toshokan.search.models import (
    ProviderSettings,
    ProviderVariant,
    SmartSearchOptions,
    TorrentRecord,
)
from toshokan.search.parsing import (
    extract_date_text,
    extract_info_hash,
    extract_size_text,
    parse_date,
    parse_resolution,
    parse_size,
    parse_stats,
)
from toshokan.search.titles import analyze_title, format_name

logger = get_logger(__name__)


# =============================================================================
# Constants
# =============================================================================

# User agent for requests
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Every title cell of a listing page
TITLE_CELL_SELECTOR = "table.listing td.desc-top"

SMART_SEARCH_FILTERS = ["batch", "episodeNumber", "resolution"]

VARIANT_SETTINGS = {
    # The site has Hentai categories; the basic variant exposes them
    ProviderVariant.BASIC: ProviderSettings(
        can_smart_search=False,
        smart_search_filters=[],
        supports_adult=True,
        type="main",
    ),
    ProviderVariant.FULL: ProviderSettings(
        can_smart_search=True,
        smart_search_filters=SMART_SEARCH_FILTERS,
        supports_adult=False,
        type="main",
    ),
}


# =============================================================================
# Exceptions
# =============================================================================


class TokyoToshokanError(Exception):
    """Base exception for Tokyo Toshokan errors."""

    pass


class TokyoToshokanUnavailableError(TokyoToshokanError):
    """Raised when the site cannot be reached or times out."""

    pass


class TokyoToshokanHTTPError(TokyoToshokanError):
    """Raised when the site answers with a non-2xx status."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Tokyo Toshokan returned HTTP {status_code}")


# =============================================================================
# Listing Parser
# =============================================================================


def _cell_text(row: Tag | None, selector: str) -> str:
    if row is None:
        return ""
    cell = row.select_one(selector)
    return cell.get_text() if cell else ""


def _details_link(row: Tag, base_url: str) -> str:
    anchor = row.select_one('a[href*="details.php"]')
    href = anchor.get("href", "") if anchor else ""
    if not href:
        return ""
    if href.startswith(("http://", "https://")):
        return href
    return f"{base_url}/{href.lstrip('/')}"


def _parse_entry(cell: Tag, base_url: str, variant: ProviderVariant) -> TorrentRecord | None:
    """Build a record from one title cell and its sibling row.

    Args:
        cell: The ``td.desc-top`` title cell.
        base_url: Site origin used for details links.
        variant: Provider variant deciding whether title heuristics run.

    Returns:
        TorrentRecord, or None when the title or magnet anchor is missing.
    """
    top_row = cell.find_parent("tr")
    if top_row is None:
        return None
    bottom_row = top_row.find_next_sibling("tr")

    # Category/icon anchors come first, the title anchor is always last
    anchors = cell.find_all("a")
    magnet_elem = cell.select_one('a[href^="magnet:"]')
    if not anchors or magnet_elem is None:
        return None

    title_elem = anchors[-1]
    title = title_elem.get_text().strip()
    magnet = magnet_elem.get("href", "")
    if not title or not magnet:
        return None

    title_href = title_elem.get("href", "")
    download_url = title_href if title_href.startswith(("http://", "https://")) else ""

    description = _cell_text(bottom_row, "td.desc-bot")
    size_text = extract_size_text(description)
    stats = parse_stats(_cell_text(bottom_row, "td.stats"))

    name = title
    resolution = parse_resolution(title)
    episode_number = -1
    batch = False
    if variant is ProviderVariant.FULL:
        info = analyze_title(title)
        episode_number = info.episode_number
        batch = info.is_batch
        name = format_name(title)

    return TorrentRecord(
        name=name,
        date=parse_date(extract_date_text(description)),
        size=parse_size(size_text),
        formatted_size=size_text,
        seeders=stats.seeders,
        leechers=stats.leechers,
        download_count=stats.completed,
        link=_details_link(top_row, base_url),
        download_url=download_url,
        magnet_link=magnet,
        info_hash=extract_info_hash(magnet),
        resolution=resolution,
        is_batch=batch,
        episode_number=episode_number,
    )


def parse_listing(
    html: str,
    base_url: str | None = None,
    variant: ProviderVariant = ProviderVariant.FULL,
) -> list[TorrentRecord]:
    """Parse a search-result or homepage listing.

    Entries without a title or magnet anchor are skipped; everything else is
    returned in site order.

    Args:
        html: HTML content of the listing page.
        base_url: Site origin used for details links, defaults to settings.
        variant: Provider variant.

    Returns:
        List of parsed TorrentRecord objects.
    """
    origin = (base_url or settings.base_url).rstrip("/")
    soup = BeautifulSoup(html, "lxml")
    cells = soup.select(TITLE_CELL_SELECTOR)

    records: list[TorrentRecord] = []
    for cell in cells:
        try:
            record = _parse_entry(cell, origin, variant)
        except Exception as e:
            logger.warning("failed_to_parse_entry", error=str(e))
            continue
        if record:
            records.append(record)

    logger.debug(
        "parse_listing",
        title_cells=len(cells),
        records=len(records),
        skipped=len(cells) - len(records),
    )
    return records


# =============================================================================
# Tokyo Toshokan Client
# =============================================================================


class TokyoToshokanClient:
    """Async client for Tokyo Toshokan.

    One client serves both provider variants: ``ProviderVariant.BASIC`` only
    searches and lists, ``ProviderVariant.FULL`` also infers episode/batch
    metadata, tags names and supports smart search.

    Example:
        async with TokyoToshokanClient() as client:
            results = await client.search("Frieren 1080p")
            for result in results:
                print(result.name, result.magnet_link)
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        variant: ProviderVariant | str | None = None,
    ) -> None:
        """Initialize Tokyo Toshokan client.

        Args:
            base_url: Site origin, defaults to ``settings.base_url``.
            timeout: Request timeout in seconds, defaults to ``settings.request_timeout``.
            variant: Provider variant (enum or its value, "anime" / "full"),
                defaults to ``settings.variant``.
        """
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout
        self.variant = ProviderVariant(variant or settings.variant)
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "TokyoToshokanClient":
        """Enter async context manager."""
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={
                "User-Agent": USER_AGENT,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.9",
            },
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, ensuring it's initialized.

        Returns:
            The httpx async client.

        Raises:
            RuntimeError: If client is not initialized (not in context manager).
        """
        if self._client is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")
        return self._client

    def get_settings(self) -> ProviderSettings:
        """Describe the provider's capabilities to the host."""
        return VARIANT_SETTINGS[self.variant].model_copy(deep=True)

    async def _fetch_page(self, url: str, params: dict | None = None) -> str:
        """Fetch a page from Tokyo Toshokan.

        Args:
            url: URL to fetch.
            params: Optional query parameters.

        Returns:
            HTML content of the page.

        Raises:
            TokyoToshokanUnavailableError: If the site cannot be reached.
            TokyoToshokanHTTPError: If the site returns a non-2xx status.
        """
        logger.debug("fetching_page", url=url, params=params)

        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            return response.text

        except httpx.ConnectError as e:
            logger.error("connection_error", url=url, error=str(e))
            raise TokyoToshokanUnavailableError(
                f"Cannot connect to Tokyo Toshokan. Site may be blocked or down: {e}"
            ) from e
        except httpx.TimeoutException as e:
            logger.error("timeout_error", url=url, error=str(e))
            raise TokyoToshokanUnavailableError(f"Request timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            logger.error("http_error", url=url, status=e.response.status_code)
            raise TokyoToshokanHTTPError(e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error("request_error", url=url, error=str(e))
            raise TokyoToshokanUnavailableError(f"Request failed: {e}") from e

    def parse_results(self, html: str) -> list[TorrentRecord]:
        """Parse a listing page with this client's origin and variant."""
        return parse_listing(html, base_url=self.base_url, variant=self.variant)

    async def search(self, query: str) -> list[TorrentRecord]:
        """Search the Anime listings of Tokyo Toshokan.

        Args:
            query: Search terms.

        Returns:
            List of TorrentRecord objects in site order.

        Raises:
            TokyoToshokanHTTPError: If the site returns a non-2xx status.
            TokyoToshokanError: For other transport errors.
        """
        logger.info("searching_tokyotosho", query=query, variant=self.variant.value)

        params = {"terms": query, "type": CATEGORY_ANIME}
        html = await self._fetch_page(f"{self.base_url}/search.php", params=params)

        results = self.parse_results(html)
        logger.info("search_results_found", count=len(results))
        return results

    async def get_latest(self) -> list[TorrentRecord]:
        """Return the homepage listing, or [] if it cannot be fetched."""
        try:
            html = await self._fetch_page(self.base_url)
        except TokyoToshokanError as e:
            logger.warning("latest_fetch_failed", error=str(e))
            return []

        results = self.parse_results(html)
        logger.info("latest_results_found", count=len(results))
        return results

    async def get_torrent_magnet_link(self, torrent: TorrentRecord) -> str:
        """Return the magnet link already embedded in the listing."""
        return torrent.magnet_link or ""

    async def smart_search(self, options: SmartSearchOptions) -> list[TorrentRecord]:
        """Search for one episode (or a batch) of a specific media title.

        Fetch failures are not raised: they are logged and an empty list is
        returned, which the host treats as "no results".

        Args:
            options: Smart search options from the host.

        Returns:
            Filtered list of TorrentRecord objects.
        """
        if self.variant is not ProviderVariant.FULL:
            logger.debug("smart_search_not_supported", variant=self.variant.value)
            return []

        query = build_smart_query(options)
        if not query:
            logger.warning("smart_search_without_query")
            return []

        logger.info(
            "smart_searching_tokyotosho",
            query=query,
            episode_number=options.episode_number,
            batch=options.batch,
            resolution=options.resolution,
        )

        params = {"terms": query, "type": category_for(options.batch)}
        try:
            html = await self._fetch_page(f"{self.base_url}/search.php", params=params)
        except TokyoToshokanError as e:
            logger.warning("smart_search_fetch_failed", query=query, error=str(e))
            return []

        results = self.parse_results(html)
        filtered = filter_smart_results(results, options)
        logger.info(
            "smart_search_results_filtered",
            original_count=len(results),
            count=len(filtered),
        )
        return filtered


# =============================================================================
# Convenience Functions
# =============================================================================


async def search_tokyotosho(
    query: str,
    variant: ProviderVariant | str | None = None,
) -> list[TorrentRecord]:
    """Search Tokyo Toshokan with a client configured from settings.

    Example:
        results = await search_tokyotosho("Frieren")
        for r in results:
            print(f"{r.name} | {r.formatted_size} | Seeds: {r.seeders}")
    """
    async with TokyoToshokanClient(variant=variant) as client:
        return await client.search(query)


async def get_latest_tokyotosho(
    variant: ProviderVariant | str | None = None,
) -> list[TorrentRecord]:
    """Fetch the homepage listing with a client configured from settings."""
    async with TokyoToshokanClient(variant=variant) as client:
        return await client.get_latest()


async def smart_search_tokyotosho(
    options: SmartSearchOptions,
    variant: ProviderVariant | str | None = None,
) -> list[TorrentRecord]:
    """Run a smart search with a client configured from settings."""
    async with TokyoToshokanClient(variant=variant) as client:
        return await client.smart_search(options)
