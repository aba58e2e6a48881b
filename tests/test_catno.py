"""
Tests for clave.core.catno.

Tests cover:
- Catalog-number key derivation from free-form strings
- Cover URL construction, position handling and the raw fallback
- Standard position list
"""

from __future__ import annotations

import logging

import pytest

from clave.core.catno import (
    STANDARD_COVER_POSITIONS,
    all_cover_urls,
    build_cover_url,
    extract_canonical_catno,
    front_cover_url,
)

BASE = "https://assets.test"


class TestExtractCanonicalCatno:
    """Tests for extract_canonical_catno()."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("AMCL 1004", "1004"),
            ("SJR LP36", "1036"),
            ("36", "1036"),
            ("SJR CD77", "1077"),
            ("AMCL 1009LP/1008EP", "1009"),
            ("LP 7", "1007"),
            ("AMCL-1021-2", "1021"),
        ],
    )
    def test_examples(self, raw: str, expected: str) -> None:
        assert extract_canonical_catno(raw) == expected

    @pytest.mark.parametrize("raw", ["no digits here", "", None, "AMCL"])
    def test_no_digits(self, raw: str | None) -> None:
        assert extract_canonical_catno(raw) is None

    def test_first_10xx_run_wins(self) -> None:
        assert extract_canonical_catno("X 2004 1011 1012") == "1011"

    def test_short_run_beats_longer_run(self) -> None:
        """A 2-3 digit run wins even when a longer run comes first."""
        assert extract_canonical_catno("SET 20045 VOL 12") == "1012"

    def test_four_digit_run_not_starting_with_10_kept(self) -> None:
        assert extract_canonical_catno("CAT 2004") == "2004"

    def test_longest_run_when_no_short_run(self) -> None:
        """Single digits and long runs: the longest is used."""
        assert extract_canonical_catno("A 1 B 2345") == "2345"
        assert extract_canonical_catno("A 1 B 2") == "1001"

    def test_runs_longer_than_four_are_prefixed(self) -> None:
        assert extract_canonical_catno("REF 12345") == "1012345"

    def test_unicode_digits_ignored(self) -> None:
        """Only ASCII digits count."""
        assert extract_canonical_catno("١٢٣") is None


class TestBuildCoverUrl:
    """Tests for build_cover_url() and friends."""

    def test_front(self) -> None:
        assert build_cover_url("AMCL 1004", "front", BASE) == f"{BASE}/1004_front_cropped.jpg"

    def test_inside_back_kept_verbatim(self) -> None:
        url = build_cover_url("AMCL 1004", "inside&back", BASE)
        assert "inside&back" in url
        assert url == f"{BASE}/1004_inside&back_cropped.jpg"

    def test_position_whitespace_removed(self) -> None:
        assert build_cover_url("AMCL 1004", " back ", BASE) == f"{BASE}/1004_back_cropped.jpg"
        assert build_cover_url("AMCL 1004", "inside & back", BASE) == f"{BASE}/1004_inside&back_cropped.jpg"

    def test_trailing_slash_on_base(self) -> None:
        assert build_cover_url("SJR LP36", "1", BASE + "/") == f"{BASE}/1036_1_cropped.jpg"

    def test_fallback_uses_raw_catalog_string(self, caplog: pytest.LogCaptureFixture) -> None:
        """No digits: the raw string without whitespace is used, with a warning."""
        with caplog.at_level(logging.WARNING, logger="clave.core.catno"):
            url = build_cover_url("AM CL", "front", BASE)
        assert url == f"{BASE}/AMCL_front_cropped.jpg"
        assert "Could not extract" in caplog.text

    def test_fallback_never_raises_on_missing_catalog(self) -> None:
        assert build_cover_url(None, "front", BASE) == f"{BASE}/_front_cropped.jpg"

    def test_default_base_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without an explicit base the configured asset URL is used."""
        from clave import config

        monkeypatch.setattr(config, "_settings", config.Settings(asset_base_url="https://configured.test"))
        assert build_cover_url("AMCL 1004", "front") == "https://configured.test/1004_front_cropped.jpg"

    def test_all_cover_urls(self) -> None:
        urls = all_cover_urls("AMCL 1004", BASE)
        assert len(urls) == len(STANDARD_COVER_POSITIONS) == 9
        assert urls[0] == f"{BASE}/1004_front_cropped.jpg"
        assert urls[2] == f"{BASE}/1004_inside&back_cropped.jpg"
        assert urls[-1] == f"{BASE}/1004_6_cropped.jpg"

    def test_standard_positions_order(self) -> None:
        assert STANDARD_COVER_POSITIONS == ("front", "back", "inside&back", "1", "2", "3", "4", "5", "6")

    def test_front_cover_url(self) -> None:
        assert front_cover_url("SJR CD77", BASE) == f"{BASE}/1077_front_cropped.jpg"
