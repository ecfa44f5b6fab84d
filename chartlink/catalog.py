"""Catalog file I/O and community name (alias) insertion."""

from chartlink import cache
from chartlink.config import (
    CATALOG_PATH,
    COMMUNITY_NAME_KEYS,
    COMMUNITY_NAMES_PATH,
    COMMUNITY_NAMES_URL,
)
from chartlink.http_utils import create_session, get_text_with_retry


def write_catalog(songs, path=CATALOG_PATH):
    """Replace the catalog file with ``songs`` (tab-indented JSON, atomic)."""
    cache.dump_json(path, songs)


def load_catalog(path=CATALOG_PATH):
    return cache.load_json(path)


# ── Community names ───────────────────────────────────────────────────

def download_community_names(path=COMMUNITY_NAMES_PATH, session=None, full=False,
                             verbose=True):
    """Download the GCM-bot alias sheet unless already cached. Returns the path."""
    if not full and cache.is_fresh(path):
        if verbose:
            print(f"  Using cached community names {path}")
        return path
    session = session or create_session()
    cache.write_text(path, get_text_with_retry(session, COMMUNITY_NAMES_URL))
    if verbose:
        print(f"  Downloaded {COMMUNITY_NAMES_URL} -> {path}")
    return path


def parse_community_names(text):
    """Parse ``song<TAB>alias<TAB>alias...`` lines into ``{song: [alias, ...]}``."""
    names = {}
    for line in text.splitlines():
        fields = line.split("\t")
        song = fields[0]
        if not song:
            continue
        names[song] = [alias for alias in fields[1:] if alias]
    return names


def community_key(song_id):
    """Alias-sheet key for a feed song id."""
    return COMMUNITY_NAME_KEYS.get(song_id, song_id)


def insert_community_names(songs, names):
    """Set ``communityNames`` on every record that has aliases. Returns how many do."""
    updated = 0
    for song in songs:
        # Majdata records have no feed id
        song_id = song.get("zetarakuId")
        aliases = names.get(community_key(song_id)) if song_id else None
        if aliases:
            song["communityNames"] = aliases
            updated += 1
        else:
            song.pop("communityNames", None)
    return updated
