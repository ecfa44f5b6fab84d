"""Link feed entries to content folders and build the merged catalog.

Two passes:
1. Resolve (sequential, no I/O): every feed entry is dispatched on its
   kind (standard or utage) and yields zero or more content ids, or a
   not-found classification
2. Assemble: Japanese strings of all matched songs are romanized in a
   thread pool, then records are built in resolution order

A content id is emitted at most once per run; later claims are kept as
duplicates for the report.
"""

from dataclasses import dataclass, field

from chartlink.config import (
    CHART_TYPE_DX,
    CHART_TYPE_STD,
    DESIGNER_PLACEHOLDER,
    DX_SUFFIX,
    INDEXED_BUT_UNRESOLVED,
    LIKELY_NOT_INDEXED,
    ROMANIZE_DEFAULT_WORKERS,
)
from chartlink.index import expand_variants, song_likely_in_index
from chartlink.romanize import romanize_all, romanize_japanese
from chartlink.utage import MATCHED, SKIPPED, UtageResolver

STANDARD = "standard"
UTAGE = "utage"
KINDS = (STANDARD, UTAGE)


def entry_kind(entry):
    return UTAGE if entry.is_utage else STANDARD


@dataclass(frozen=True)
class Link:
    """One feed entry matched to one content folder."""
    entry: object
    content_id: str
    kind: str


@dataclass(frozen=True)
class Unmatched:
    song_id: str
    classification: str
    kind: str


@dataclass
class LinkResult:
    links: list = field(default_factory=list)
    unmatched: list = field(default_factory=list)
    duplicates: list = field(default_factory=list)   # (song_id, content_id)
    skipped: list = field(default_factory=list)      # utage song ids without a marker
    entries_processed: dict = field(default_factory=lambda: dict.fromkeys(KINDS, 0))

    def not_found(self, classification):
        """Song ids with the given classification, in feed order."""
        return [u.song_id for u in self.unmatched if u.classification == classification]

    def links_of_kind(self, kind):
        return [link for link in self.links if link.kind == kind]


class MatchResolver:
    """Resolves feed entries against one CandidateIndex."""

    def __init__(self, index):
        self.index = index
        self.utage = UtageResolver(index)
        self._resolvers = {
            STANDARD: self._resolve_standard,
            UTAGE: self._resolve_utage,
        }

    def _resolve_standard(self, entry):
        """Returns (classification, content_ids); classification is None on success."""
        if not song_likely_in_index(self.index, entry.song_id, entry.title):
            return LIKELY_NOT_INDEXED, []
        base, dx, st = expand_variants(self.index, entry.song_id, entry.title)
        if not base:
            return INDEXED_BUT_UNRESOLVED, []
        return None, [cid for cid in (base, dx, st) if cid]

    def _resolve_utage(self, entry):
        match = self.utage.resolve(entry)
        if match.status == SKIPPED:
            return SKIPPED, []
        if match.status == MATCHED:
            return None, match.content_ids
        return match.status, []

    def resolve(self, entries):
        """Resolve all entries in order. Never raises for an unmatched entry."""
        result = LinkResult()
        claimed = set()
        for entry in entries:
            kind = entry_kind(entry)
            classification, content_ids = self._resolvers[kind](entry)
            if classification == SKIPPED:
                result.skipped.append(entry.song_id)
                continue
            result.entries_processed[kind] += 1
            if classification is not None:
                result.unmatched.append(Unmatched(entry.song_id, classification, kind))
                continue
            for content_id in content_ids:
                if content_id in claimed:
                    result.duplicates.append((entry.song_id, content_id))
                    continue
                claimed.add(content_id)
                result.links.append(Link(entry, content_id, kind))
        return result


# ── Record assembly ───────────────────────────────────────────────────

def select_sheets(entry, folder_name):
    """Sheets whose levels belong to this folder.

    When the feed lists both std and dx charts, a folder ending in [DX]
    takes the dx sheets and any other folder the std sheets.  Otherwise
    all sheets are kept.
    """
    types = {s.chart_type for s in entry.sheets}
    if CHART_TYPE_DX in types and CHART_TYPE_STD in types:
        wanted = CHART_TYPE_DX if folder_name.endswith(DX_SUFFIX.strip()) else CHART_TYPE_STD
        return [s for s in entry.sheets if s.chart_type == wanted]
    return list(entry.sheets)


def designer_credit(sheets):
    """Distinct note designers in encounter order, comma-joined; None if there are none."""
    designers = []
    for sheet in sheets:
        name = sheet.note_designer
        if name and name != DESIGNER_PLACEHOLDER and name not in designers:
            designers.append(name)
    return ",".join(designers) if designers else None


def build_song(entry, content_id, folder_name, romaji=None):
    """Build one catalog record. ``romaji`` maps Japanese strings to their romanization."""
    romaji = romaji or {}
    sheets = select_sheets(entry, folder_name)
    designer = designer_credit(sheets)

    song = {
        "id": content_id,
        "zetarakuId": entry.song_id,
        "title": folder_name,
        "artist": entry.artist,
    }
    if designer:
        song["designer"] = designer
    song["releaseDate"] = entry.release_date
    song["levels"] = [s.level for s in sheets]
    if folder_name in romaji:
        song["romanizedTitle"] = romaji[folder_name]
    if entry.artist in romaji:
        song["romanizedArtist"] = romaji[entry.artist]
    if designer and designer in romaji:
        song["romanizedDesigner"] = romaji[designer]
    return song


def _romanizable_texts(index, links):
    for link in links:
        folder_name = index.name_for(link.content_id)
        yield folder_name
        yield link.entry.artist
        designer = designer_credit(select_sheets(link.entry, folder_name))
        if designer:
            yield designer


def link_catalog(entries, index, romanize=romanize_japanese,
                 workers=ROMANIZE_DEFAULT_WORKERS):
    """Resolve ``entries`` against ``index`` and build catalog records.

    Pass ``romanize=None`` to skip romanization.  Returns (songs, LinkResult).
    """
    result = MatchResolver(index).resolve(entries)
    romaji = {}
    if romanize is not None:
        romaji = romanize_all(_romanizable_texts(index, result.links),
                              romanize=romanize, workers=workers)
    songs = [
        build_song(link.entry, link.content_id, index.name_for(link.content_id), romaji)
        for link in result.links
    ]
    return songs, result
