"""Tests for catalog I/O and community name insertion."""

from chartlink.catalog import (
    community_key,
    insert_community_names,
    load_catalog,
    parse_community_names,
    write_catalog,
)

ALIAS_SHEET = (
    "Title A\tta\ttitle-a\n"
    "Link\tlink-niconico\n"
    "Link (maimai)\tlink-maimai\n"
    "\tno song name\n"
    "青春コンプレックス\t\tseishun\t\n"
    "Bare\n"
)


def _song(zetaraku_id, content_id="c"):
    return {"id": content_id, "zetarakuId": zetaraku_id, "title": zetaraku_id}


class TestParseCommunityNames:
    """Tests for parse_community_names()."""

    def test_parses_rows(self):
        names = parse_community_names(ALIAS_SHEET)
        assert names["Title A"] == ["ta", "title-a"]
        assert names["Link"] == ["link-niconico"]

    def test_drops_empty_fields_and_rows(self):
        names = parse_community_names(ALIAS_SHEET)
        assert names["青春コンプレックス"] == ["seishun"]
        assert "" not in names
        assert names["Bare"] == []

    def test_crlf(self):
        assert parse_community_names("A\ta1\r\nB\tb1\r\n") == {"A": ["a1"], "B": ["b1"]}


class TestCommunityKey:
    """Tests for the feed id → alias sheet key remapping."""

    def test_link_songs_swap(self):
        assert community_key("Link") == "Link (maimai)"
        assert community_key("Link (2)") == "Link"

    def test_passthrough(self):
        assert community_key("Title A") == "Title A"


class TestInsertCommunityNames:
    """Tests for insert_community_names()."""

    def test_inserts_by_feed_id(self):
        songs = [_song("Title A"), _song("Link"), _song("Link (2)"), _song("Nobody")]
        updated = insert_community_names(songs, parse_community_names(ALIAS_SHEET))
        assert updated == 3
        assert songs[0]["communityNames"] == ["ta", "title-a"]
        assert songs[1]["communityNames"] == ["link-maimai"]
        assert songs[2]["communityNames"] == ["link-niconico"]
        assert "communityNames" not in songs[3]

    def test_stale_aliases_removed(self):
        songs = [dict(_song("Bare"), communityNames=["old"])]
        assert insert_community_names(songs, parse_community_names(ALIAS_SHEET)) == 0
        assert "communityNames" not in songs[0]

    def test_majdata_records_have_no_aliases(self):
        songs = [{"majdataId": "m1", "title": "Title A", "artist": "x"}]
        assert insert_community_names(songs, {"Title A": ["ta"]}) == 0
        assert "communityNames" not in songs[0]

    def test_every_variant_record_gets_aliases(self):
        songs = [_song("Title A", "id1"), _song("Title A", "id2")]
        insert_community_names(songs, {"Title A": ["ta"]})
        assert [s["communityNames"] for s in songs] == [["ta"], ["ta"]]


class TestCatalogFile:
    """Tests for write_catalog() and load_catalog()."""

    def test_roundtrip_keeps_order(self, tmp_path):
        path = tmp_path / "songs.json"
        songs = [_song("B", "2"), _song("A", "1")]
        write_catalog(songs, path)
        assert load_catalog(path) == songs
        assert path.read_text(encoding="utf-8").startswith("[\n\t{")

    def test_rewrite_replaces_file(self, tmp_path):
        path = tmp_path / "songs.json"
        write_catalog([_song("A")], path)
        write_catalog([], path)
        assert load_catalog(path) == []
