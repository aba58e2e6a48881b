"""
Tests for clave.core.fields.

Tests cover:
- classify() for every raw value shape
- Tracklist decoding (JSON strings, string lists, object lists, junk)
- Tracklist field precedence on album records
- Picture list decoding and primary picture selection
"""

from __future__ import annotations

import pytest

from clave.core.fields import (
    UNKNOWN_TRACK_TITLE,
    CanonicalTrack,
    FieldKind,
    album_tracklist,
    classify,
    normalize_pictures,
    normalize_tracklist,
    primary_picture,
)


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        ("raw", "kind"),
        [
            (None, FieldKind.EMPTY),
            ("", FieldKind.EMPTY),
            ("   ", FieldKind.EMPTY),
            (b"", FieldKind.EMPTY),
            ('["a"]', FieldKind.JSON_ENCODED),
            ("plain text", FieldKind.JSON_ENCODED),
            (b'["a"]', FieldKind.JSON_ENCODED),
            (["a"], FieldKind.NATIVE_ARRAY),
            (("a",), FieldKind.NATIVE_ARRAY),
            ({"a": 1}, FieldKind.NATIVE_SCALAR),
            (42, FieldKind.NATIVE_SCALAR),
        ],
    )
    def test_kinds(self, raw: object, kind: FieldKind) -> None:
        """Every raw shape maps to exactly one kind."""
        assert classify(raw).kind is kind

    def test_bytes_are_decoded(self) -> None:
        """BLOB columns arrive as bytes and are decoded to text."""
        assert classify(b'["x"]').value == '["x"]'

    def test_undecodable_bytes_are_empty(self) -> None:
        assert classify(b"\xff\xfe\xfa").kind is FieldKind.EMPTY


class TestNormalizeTracklist:
    """Tests for normalize_tracklist()."""

    EXPECTED_AB = [CanonicalTrack(position=1, title="A"), CanonicalTrack(position=2, title="B")]

    def test_json_string_and_native_list_agree(self) -> None:
        """A JSON-encoded list and the same list decoded give the same tracks."""
        assert normalize_tracklist('["A","B"]') == normalize_tracklist(["A", "B"]) == self.EXPECTED_AB

    def test_invalid_json_gives_empty(self) -> None:
        """Malformed JSON must not raise."""
        assert normalize_tracklist("not json") == []
        assert normalize_tracklist('["unterminated"') == []

    @pytest.mark.parametrize("raw", [None, "", [], "{}", '"just a string"', "42", 42, {"title": "x"}])
    def test_empty_or_unusable(self, raw: object) -> None:
        """Absent, empty and non-list values give no tracks."""
        assert normalize_tracklist(raw) == []

    def test_object_list_defaults(self) -> None:
        """Objects use number, then position, then index; title, then name."""
        tracks = normalize_tracklist(
            [
                {"number": 3, "title": "Third", "duration": "3:45"},
                {"position": 5, "name": "Named"},
                {"duration": 241},
            ]
        )
        assert tracks == [
            CanonicalTrack(position=3, title="Third", duration="3:45"),
            CanonicalTrack(position=5, title="Named"),
            CanonicalTrack(position=3, title=UNKNOWN_TRACK_TITLE, duration="241"),
        ]

    def test_number_takes_precedence_over_position(self) -> None:
        tracks = normalize_tracklist([{"number": 7, "position": 2, "title": "T"}])
        assert tracks[0].position == 7

    def test_invalid_positions_fall_back_to_index(self) -> None:
        """Positions must be integers >= 1."""
        tracks = normalize_tracklist(
            [
                {"number": 0, "title": "zero"},
                {"number": "x", "title": "bad"},
                {"number": "4", "title": "string digits"},
                {"number": True, "title": "bool"},
            ]
        )
        assert [t.position for t in tracks] == [1, 2, 4, 4]

    def test_blank_titles_become_unknown(self) -> None:
        tracks = normalize_tracklist(["", {"title": "  "}])
        assert [t.title for t in tracks] == [UNKNOWN_TRACK_TITLE, UNKNOWN_TRACK_TITLE]

    def test_mixed_list_skips_unusable_items(self) -> None:
        """Items that are neither strings nor objects are skipped, positions keep the index."""
        tracks = normalize_tracklist(["One", None, 17, {"title": "Four"}])
        assert tracks == [CanonicalTrack(1, "One"), CanonicalTrack(4, "Four")]

    def test_json_encoded_objects(self) -> None:
        raw = '[{"number": 1, "title": "Early Meaning", "duration": "4:12"}]'
        assert normalize_tracklist(raw) == [CanonicalTrack(1, "Early Meaning", "4:12")]

    def test_bytes_blob(self) -> None:
        assert normalize_tracklist(b'["A", "B"]') == self.EXPECTED_AB

    def test_positions_contiguous_for_string_lists(self) -> None:
        tracks = normalize_tracklist([f"Track {i}" for i in range(12)])
        assert [t.position for t in tracks] == list(range(1, 13))


class TestAlbumTracklist:
    """Tests for album_tracklist() field precedence."""

    def test_tracklist_wins_when_non_empty(self) -> None:
        album = {"tracklist": ["From tracklist"], "track_list": ["From track_list"]}
        assert album_tracklist(album) == [CanonicalTrack(1, "From tracklist")]

    def test_falls_back_to_track_list(self) -> None:
        """An empty or broken tracklist field defers to track_list."""
        for tracklist in (None, [], "not json", "[]"):
            album = {"tracklist": tracklist, "track_list": '["Fallback"]'}
            assert album_tracklist(album) == [CanonicalTrack(1, "Fallback")]

    def test_neither_field(self) -> None:
        assert album_tracklist({"title": "No tracks"}) == []


class TestNormalizePictures:
    """Tests for normalize_pictures() and primary_picture()."""

    def test_json_array(self) -> None:
        assert normalize_pictures('["/a.jpg", "/b.jpg"]') == ["/a.jpg", "/b.jpg"]

    def test_json_string(self) -> None:
        assert normalize_pictures('"/a.jpg"') == ["/a.jpg"]

    def test_plain_string(self) -> None:
        """Text that is not JSON is a single path, kept as-is."""
        assert normalize_pictures("/players/zeke.jpg") == ["/players/zeke.jpg"]
        assert normalize_pictures("https://cdn.test/x.jpg") == ["https://cdn.test/x.jpg"]

    def test_native_list(self) -> None:
        assert normalize_pictures(["/a.jpg", "/b.jpg"]) == ["/a.jpg", "/b.jpg"]

    def test_non_string_items_dropped(self) -> None:
        assert normalize_pictures(["/a.jpg", None, 3, ""]) == ["/a.jpg"]
        assert normalize_pictures('["/a.jpg", null, {"x": 1}]') == ["/a.jpg"]

    @pytest.mark.parametrize("raw", [None, "", "null", "42", '{"url": "/a.jpg"}', 42, {"url": "/a.jpg"}])
    def test_unusable(self, raw: object) -> None:
        assert normalize_pictures(raw) == []

    def test_primary_picture(self) -> None:
        assert primary_picture(["/first.jpg", "/second.jpg"]) == "/first.jpg"
        assert primary_picture([]) is None
        assert primary_picture(normalize_pictures("not json but a path")) == "not json but a path"
