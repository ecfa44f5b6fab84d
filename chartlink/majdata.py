"""Majdata.net chart listing → extra catalog records.

Majdata charts have no Drive folder, so their records carry a
``majdataId`` instead of ``id``/``zetarakuId``.  They are appended after
the linked songs; records from an earlier append are replaced, so
running the step twice does not duplicate them.
"""

import json
from dataclasses import dataclass

from chartlink import cache
from chartlink.config import MAJDATA_PATH, MAJDATA_URL, ROMANIZE_DEFAULT_WORKERS
from chartlink.http_utils import create_session, get_text_with_retry
from chartlink.romanize import romanize_all, romanize_japanese


@dataclass(frozen=True)
class MajdataChart:
    chart_id: str
    title: str
    artist: str


def download_majdata(path=MAJDATA_PATH, session=None, full=False, verbose=True):
    """Download the Majdata chart list unless already cached. Returns the path."""
    if not full and cache.is_fresh(path):
        if verbose:
            print(f"  Using cached Majdata list {path}")
        return path
    session = session or create_session()
    text = get_text_with_retry(session, MAJDATA_URL)
    json.loads(text)
    cache.write_text(path, text)
    if verbose:
        print(f"  Downloaded {MAJDATA_URL} -> {path}")
    return path


def parse_majdata(data):
    """Parse the decoded chart list (a JSON array) into MajdataChart objects."""
    return [
        MajdataChart(
            chart_id=str(raw["id"]),
            title=raw.get("title") or "",
            artist=raw.get("artist") or "",
        )
        for raw in data
    ]


def load_majdata(path=MAJDATA_PATH):
    return parse_majdata(cache.load_json(path))


def build_majdata_song(chart, romaji=None):
    romaji = romaji or {}
    song = {
        "majdataId": chart.chart_id,
        "title": chart.title,
        "artist": chart.artist,
    }
    if chart.title in romaji:
        song["romanizedTitle"] = romaji[chart.title]
    if chart.artist in romaji:
        song["romanizedArtist"] = romaji[chart.artist]
    return song


def append_majdata(songs, charts, romanize=romanize_japanese,
                   workers=ROMANIZE_DEFAULT_WORKERS):
    """Return ``songs`` without old Majdata records, plus one record per chart.

    Pass ``romanize=None`` to skip romanization.
    """
    romaji = {}
    if romanize is not None:
        texts = [t for chart in charts for t in (chart.title, chart.artist)]
        romaji = romanize_all(texts, romanize=romanize, workers=workers)
    kept = [song for song in songs if "majdataId" not in song]
    return kept + [build_majdata_song(chart, romaji) for chart in charts]
