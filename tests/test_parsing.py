"""Tests for Tokyo Toshokan field extractors."""

from datetime import UTC, datetime

from toshokan.search.parsing import (
    TorrentStats,
    extract_date_text,
    extract_info_hash,
    extract_size_text,
    parse_date,
    parse_resolution,
    parse_size,
    parse_stats,
)

DESCRIPTION = (
    "Submitter: SubsPlease | Size: 1.4GB | Date: 2024-01-15 12:30 UTC | "
    "Comment: https://subsplease.org"
)


class TestParseSize:
    """Tests for size parsing."""

    def test_parse_mb(self):
        """Test fractional MB sizes round to the nearest byte."""
        assert parse_size("75.63MB") == round(75.63 * 1024 * 1024)

    def test_parse_gb(self):
        """Test GB sizes use binary multiples."""
        assert parse_size("1GB") == 1073741824

    def test_parse_kb(self):
        """Test KB sizes."""
        assert parse_size("512KB") == 524288

    def test_parse_with_space_and_lowercase(self):
        """Test optional space and case-insensitive unit."""
        assert parse_size("1 gb") == 1073741824
        assert parse_size("2.5 Mb") == round(2.5 * 1024**2)

    def test_parse_invalid_size(self):
        """Test unparsable strings yield 0."""
        assert parse_size("Unknown") == 0
        assert parse_size("") == 0
        assert parse_size("0") == 0

    def test_parse_unknown_unit(self):
        """Test units outside GB/MB/KB yield 0."""
        assert parse_size("1.5TB") == 0

    def test_parse_malformed_number(self):
        """Test a number with several dots yields 0."""
        assert parse_size("1.2.3MB") == 0


class TestParseDate:
    """Tests for UTC date parsing."""

    def test_parse_utc_date(self):
        """Test the site date format is read as UTC."""
        result = parse_date("2024-01-15 12:30 UTC")
        assert result == "2024-01-15T12:30:00.000Z"
        parsed = datetime.fromisoformat(result.replace("Z", "+00:00"))
        assert parsed == datetime(2024, 1, 15, 12, 30, tzinfo=UTC)

    def test_parse_date_with_seconds(self):
        """Test timestamps carrying seconds."""
        assert parse_date("2024-01-15 12:30:45 UTC") == "2024-01-15T12:30:45.000Z"

    def test_parse_date_surrounding_whitespace(self):
        """Test whitespace around the date is ignored."""
        assert parse_date("  2023-12-31 23:59 UTC\n") == "2023-12-31T23:59:00.000Z"

    def test_parse_empty_date(self):
        """Test empty input gives empty output."""
        assert parse_date("") == ""
        assert parse_date("   ") == ""

    def test_parse_unknown_format(self):
        """Test unknown formats give empty output instead of raising."""
        assert parse_date("yesterday UTC") == ""


class TestParseStats:
    """Tests for stats parsing."""

    def test_parse_all_counters(self):
        """Test seeders, leechers and completed are read."""
        assert parse_stats("S: 12 L: 3 C: 500") == TorrentStats(12, 3, 500)

    def test_missing_counters_default_to_zero(self):
        """Test missing counters default to 0."""
        stats = parse_stats("S: 5")
        assert stats.seeders == 5
        assert stats.leechers == 0
        assert stats.completed == 0

    def test_parse_with_extra_fields(self):
        """Test the listing ID after the counters is ignored."""
        assert parse_stats("S: 7 L: 1 C: 42 ID: 1701234") == TorrentStats(7, 1, 42)

    def test_parse_empty_stats(self):
        """Test empty stats text."""
        assert parse_stats("") == TorrentStats(0, 0, 0)


class TestDescriptionFields:
    """Tests for size/date substring extraction from the description."""

    def test_extract_size_text(self):
        """Test the raw size substring is returned unparsed."""
        assert extract_size_text(DESCRIPTION) == "1.4GB"

    def test_extract_size_text_missing(self):
        """Test missing size falls back to "0"."""
        assert extract_size_text("Submitter: nobody") == "0"

    def test_extract_date_text(self):
        """Test the date substring ends at the UTC label."""
        assert extract_date_text(DESCRIPTION) == "2024-01-15 12:30 UTC"

    def test_extract_date_text_missing(self):
        """Test missing date gives empty string."""
        assert extract_date_text("Size: 1GB") == ""


class TestExtractInfoHash:
    """Tests for info hash extraction."""

    def test_extract_from_magnet(self):
        """Test the hash after btih: is returned as written."""
        magnet = "magnet:?xt=urn:btih:0123456789abcdef0123456789abcdef01234567&dn=Test"
        assert extract_info_hash(magnet) == "0123456789abcdef0123456789abcdef01234567"

    def test_extract_base32_hash(self):
        """Test base32 hashes are accepted."""
        magnet = "magnet:?xt=urn:btih:MFRGGZDFMZTWQ2LKNNWG23TPOBYXE43U&tr=udp://x"
        assert extract_info_hash(magnet) == "MFRGGZDFMZTWQ2LKNNWG23TPOBYXE43U"

    def test_no_hash(self):
        """Test magnet without btih."""
        assert extract_info_hash("magnet:?dn=Test") == ""


class TestParseResolution:
    """Tests for resolution extraction."""

    def test_resolution_case_preserved(self):
        """Test the token is returned as found."""
        assert parse_resolution("[Group] Show - 01 [720p]") == "720p"
        assert parse_resolution("[Group] Show - 01 (1080P)") == "1080P"

    def test_no_resolution(self):
        """Test titles without a resolution token."""
        assert parse_resolution("[Group] Show - 01") == ""

    def test_resolution_must_be_whole_word(self):
        """Test tokens glued to other text are ignored."""
        assert parse_resolution("Show x1080pHEVC") == ""
