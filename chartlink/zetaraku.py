"""zetaraku maimai song database (the metadata feed).

The feed is a single static JSON document.  It is downloaded once and
kept in the local data directory; pass ``full=True`` to refresh it.
"""

import json
from dataclasses import dataclass, field

from chartlink import cache
from chartlink.config import CHART_TYPE_UTAGE, FEED_PATH, FEED_URL
from chartlink.http_utils import create_session, get_text_with_retry


@dataclass(frozen=True)
class Sheet:
    chart_type: str              # "std", "dx" or "utage"
    difficulty: str              # "basic" ... "remaster", or "【宴】" for utage
    level: str                   # "13+", "14", ...
    note_designer: str = None    # "-" when unknown


@dataclass(frozen=True)
class FeedEntry:
    song_id: str
    title: str
    artist: str
    sheets: tuple = field(default_factory=tuple)
    release_date: str = ""

    @property
    def first_sheet(self):
        return self.sheets[0] if self.sheets else None

    @property
    def is_utage(self):
        """Utage entries are recognised by the chart type of their first sheet."""
        first = self.first_sheet
        return first is not None and first.chart_type == CHART_TYPE_UTAGE


def parse_sheet(raw):
    return Sheet(
        chart_type=raw.get("type") or "",
        difficulty=raw.get("difficulty") or "",
        level=str(raw.get("level") or ""),
        note_designer=raw.get("noteDesigner"),
    )


def parse_entry(raw):
    return FeedEntry(
        song_id=raw["songId"],
        title=raw.get("title") or raw["songId"],
        artist=raw.get("artist") or "",
        sheets=tuple(parse_sheet(s) for s in raw.get("sheets") or []),
        release_date=raw.get("releaseDate") or "",
    )


def parse_feed(data):
    """Parse the decoded feed document (``{"songs": [...]}``) into FeedEntry objects."""
    return [parse_entry(raw) for raw in data["songs"]]


def download_feed(path=FEED_PATH, session=None, full=False, verbose=True):
    """Download the feed JSON to ``path`` unless already cached. Returns the path."""
    if not full and cache.is_fresh(path):
        if verbose:
            print(f"  Using cached feed {path}")
        return path
    session = session or create_session()
    text = get_text_with_retry(session, FEED_URL)
    # Refuse to cache a document that will not parse later
    json.loads(text)
    cache.write_text(path, text)
    if verbose:
        print(f"  Downloaded {FEED_URL} -> {path}")
    return path


def load_feed(path=FEED_PATH):
    """Load and parse the cached feed. Missing file or bad JSON raises."""
    return parse_feed(cache.load_json(path))
