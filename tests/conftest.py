"""Shared fixtures and factories for chartlink tests."""

import pytest

from chartlink.index import CandidateIndex
from chartlink.zetaraku import FeedEntry, Sheet


def make_sheet(chart_type="std", difficulty="master", level="13", designer=None):
    """Build a minimal chart sheet."""
    return Sheet(chart_type=chart_type, difficulty=difficulty, level=level,
                 note_designer=designer)


def make_entry(song_id, *, title=None, artist="Artist", sheets=None,
               release_date="2020-01-01"):
    """Build a feed entry; title defaults to the song id."""
    if sheets is None:
        sheets = [make_sheet()]
    return FeedEntry(
        song_id=song_id,
        title=song_id if title is None else title,
        artist=artist,
        sheets=tuple(sheets),
        release_date=release_date,
    )


def make_utage(song_id, *, title=None, difficulty="【宴】", level="13?", designer=None):
    """Build a utage feed entry with a single utage sheet."""
    return make_entry(song_id, title=title,
                      sheets=[make_sheet("utage", difficulty, level, designer)])


@pytest.fixture
def index():
    """A small content index covering the common naming schemes."""
    return CandidateIndex.build([
        ("Title A", "id1"),
        ("Title A [DX]", "id2"),
        ("Both Engines", "both"),
        ("Both Engines [DX]", "both-dx"),
        ("Both Engines [ST]", "both-st"),
        ("Hello, World!", "hello"),
        ("[宴 NO.1] Garakuta Doll Play", "idX"),
        ("[宴 NO.3] Wonderland Wars オープニング", "ww3"),
        ("[協] Reach For The Stars", "rfts"),
        ("[協]青春コンプレックス [EASY]", "seishun-easy"),
        ("[協]青春コンプレックス [HARD]", "seishun-hard"),
        ("[宴]Unclaimed [1P]", "unclaimed-1p"),
        ("Orphan [ST]", "orphan-st"),
    ])
