"""Tests for utage (宴) entry resolution."""

import pytest

from chartlink.config import INDEXED_BUT_UNRESOLVED, LIKELY_NOT_INDEXED
from chartlink.index import CandidateIndex
from chartlink.utage import (
    MATCHED,
    SKIPPED,
    UtageResolver,
    _difficulty_marker,
    _garakuta_doll_play,
    _wonderland_wars_opening,
    utage_base_name,
)
from tests.conftest import make_entry, make_utage


class TestBaseName:
    """Tests for utage_base_name()."""

    def test_paren_marker_with_space(self):
        assert utage_base_name(make_utage("(宴) Garakuta Doll Play (1)")) == "Garakuta Doll Play (1)"

    def test_bracket_marker_without_space(self):
        assert utage_base_name(make_utage("[協]青春コンプレックス")) == "青春コンプレックス"

    def test_title_before_song_id(self):
        entry = make_utage("[協]青春コンプレックス（ヒーロー級）", title="[協]青春コンプレックス")
        assert utage_base_name(entry) == "青春コンプレックス"

    def test_song_id_when_title_has_no_marker(self):
        entry = make_utage("(宴) Garakuta Doll Play (2)", title="Garakuta Doll Play")
        assert utage_base_name(entry) == "Garakuta Doll Play (2)"

    def test_no_marker(self):
        assert utage_base_name(make_utage("Plain Song")) is None

    def test_marker_must_be_one_character(self):
        assert utage_base_name(make_utage("(宴宴) Song")) is None


class TestNameRules:
    """Tests for the individual name synthesis rules."""

    def test_garakuta(self):
        assert _garakuta_doll_play("Garakuta Doll Play (3)", "【宴】") == "[宴 NO.3] Garakuta Doll Play"
        assert _garakuta_doll_play("Garakuta Doll Play", "【宴】") is None

    @pytest.mark.parametrize("word,num", [
        ("EASY", "1"), ("BASIC", "2"), ("ADVANCED", "3"),
        ("EXPERT", "4"), ("MASTER", "5"), ("Re:MASTER", "6"),
    ])
    def test_wonderland_wars(self, word, num):
        name = _wonderland_wars_opening(f"Wonderland Wars オープニング ({word})", "【宴】")
        assert name == f"[宴 NO.{num}] Wonderland Wars オープニング"

    def test_wonderland_wars_unknown_word(self):
        assert _wonderland_wars_opening("Wonderland Wars オープニング (ULTIMA)", "【宴】") is None

    def test_difficulty_marker_strips_part_number(self):
        assert _difficulty_marker("Reach For The Stars (2)", "【協】") == "[協] Reach For The Stars"

    def test_difficulty_marker_needs_bracketed_label(self):
        assert _difficulty_marker("Reach For The Stars", "master") is None
        assert _difficulty_marker("Reach For The Stars", "") is None


class TestResolve:
    """Tests for UtageResolver.resolve()."""

    def test_synthesized_garakuta(self, index):
        match = UtageResolver(index).resolve(make_utage("(宴) Garakuta Doll Play (1)"))
        assert match.status == MATCHED
        assert match.base_name == "Garakuta Doll Play (1)"
        assert match.content_ids == ["idX"]

    def test_synthesized_wonderland_wars(self, index):
        match = UtageResolver(index).resolve(
            make_utage("(宴) Wonderland Wars オープニング (ADVANCED)"))
        assert match.content_ids == ["ww3"]

    def test_unknown_difficulty_word_is_not_indexed(self, index):
        match = UtageResolver(index).resolve(
            make_utage("(宴) Wonderland Wars オープニング (ULTIMA)"))
        assert match.status == LIKELY_NOT_INDEXED
        assert match.content_ids == []

    def test_difficulty_marker_rule(self, index):
        match = UtageResolver(index).resolve(
            make_utage("(宴) Reach For The Stars (2)", difficulty="【協】"))
        assert match.content_ids == ["rfts"]

    def test_existing_names(self, index):
        match = UtageResolver(index).resolve(make_utage("[協]青春コンプレックス"))
        assert match.content_ids == ["seishun-easy", "seishun-hard"]

    def test_hero_class_keeps_hard(self, index):
        entry = make_utage("[協]青春コンプレックス（ヒーロー級）", title="[協]青春コンプレックス")
        assert UtageResolver(index).resolve(entry).content_ids == ["seishun-hard"]

    def test_introductory_keeps_easy(self, index):
        entry = make_utage("[協]青春コンプレックス（入門編）", title="[協]青春コンプレックス")
        assert UtageResolver(index).resolve(entry).content_ids == ["seishun-easy"]

    def test_not_indexed(self, index):
        match = UtageResolver(index).resolve(make_utage("(宴) Never Converted"))
        assert match.status == LIKELY_NOT_INDEXED

    def test_tier_filter_leaves_nothing(self):
        index = CandidateIndex.build([("[協]Duo [1P]", "duo-1p")])
        entry = make_utage("[協]Duo（入門編）", title="[協]Duo")
        match = UtageResolver(index).resolve(entry)
        assert match.status == INDEXED_BUT_UNRESOLVED
        assert match.base_name == "Duo"

    def test_no_marker_is_skipped(self, index):
        assert UtageResolver(index).resolve(make_utage("Plain Song")).status == SKIPPED

    def test_no_sheets(self, index):
        entry = make_entry("(宴) Garakuta Doll Play (1)", sheets=[])
        assert UtageResolver(index).resolve(entry).content_ids == ["idX"]

    def test_custom_rule_table(self, index):
        resolver = UtageResolver(index, rules=[
            lambda base, difficulty: "Not A Folder",
            lambda base, difficulty: "Title A",
        ])
        assert resolver.resolve(make_utage("(宴) Anything")).content_ids == ["id1"]

    def test_utage_names_only_bracket_markers(self, index):
        resolver = UtageResolver(index)
        assert "[宴 NO.1] Garakuta Doll Play" not in resolver.utage_names
        assert "[協] Reach For The Stars" in resolver.utage_names
