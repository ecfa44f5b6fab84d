"""Utage (宴, bonus/event chart) resolution.

Feed utage entries are named "<marker> <base song>", e.g.
"(宴) Garakuta Doll Play (1)" or "[協]青春コンプレックス".  Drive folders
for the same charts use several naming schemes, so resolution runs:

1. Existing-name search: utage-looking folder names that contain the
   base song name
2. Name synthesis: an ordered table of per-song rewrite rules; the first
   rule whose synthesized folder name exists wins
3. Tier filter: a few song ids carry a Japanese suffix that picks the
   [EASY] or [HARD] folder

If neither 1 nor 2 finds anything, the song is most likely not converted
yet.  If they do but no folder id survives, it needs a new rule.
"""

import re
from dataclasses import dataclass, field

from chartlink.config import INDEXED_BUT_UNRESOLVED, LIKELY_NOT_INDEXED

# One bracketed marker character, optional space, then the base name.
UTAGE_NAME_RE = re.compile(r"^[(\[].[)\]] ?(.+)$")
# Utage difficulty labels look like "【宴】", "【協】", "【光】".
UTAGE_DIFFICULTY_RE = re.compile(r"^【(.)】$")

_TRAILING_PART_RE = re.compile(r" \(\d\)$")

# Wonderland Wars opening charts are numbered by difficulty on Drive.
WONDERLAND_WARS_NUMBERS = {
    "EASY": "1",
    "BASIC": "2",
    "ADVANCED": "3",
    "EXPERT": "4",
    "MASTER": "5",
    "Re:MASTER": "6",
}

MATCHED = "matched"
SKIPPED = "skipped"


# ── Name synthesis rules ──────────────────────────────────────────────
# Each rule takes (base_name, difficulty) and returns a candidate folder
# name or None.  Rules are tried in table order.

def _garakuta_doll_play(base_name, difficulty):
    """Garakuta Doll Play (1) → [宴 NO.1] Garakuta Doll Play"""
    m = re.match(r"^Garakuta Doll Play \((\d)\)$", base_name)
    if m:
        return f"[宴 NO.{m.group(1)}] Garakuta Doll Play"
    return None


def _wonderland_wars_opening(base_name, difficulty):
    """Wonderland Wars オープニング (EASY) → [宴 NO.1] Wonderland Wars オープニング"""
    m = re.match(r"^Wonderland Wars オープニング \(([A-Za-z:]+)\)$", base_name)
    if not m:
        return None
    num = WONDERLAND_WARS_NUMBERS.get(m.group(1))
    if num is None:
        return None
    return f"[宴 NO.{num}] Wonderland Wars オープニング"


def _difficulty_marker(base_name, difficulty):
    """Reach For The Stars (2) with difficulty 【協】 → [協] Reach For The Stars"""
    m = UTAGE_DIFFICULTY_RE.match(difficulty or "")
    if not m:
        return None
    return f"[{m.group(1)}] {_TRAILING_PART_RE.sub('', base_name)}"


UTAGE_NAME_RULES = [
    _garakuta_doll_play,
    _wonderland_wars_opening,
    _difficulty_marker,
]

# (song id suffix, folder name suffix to keep)
UTAGE_TIER_FILTERS = [
    ("（ヒーロー級）", "[HARD]"),  # "hero class"
    ("（入門編）", "[EASY]"),      # "introductory edition"
]


@dataclass
class UtageMatch:
    status: str                  # MATCHED, SKIPPED, or a not-found classification
    base_name: str = None
    content_ids: list = field(default_factory=list)


def utage_base_name(entry):
    """Base song name of a utage entry, or None if it carries no marker.

    The title is tried before the song id: "[協]青春コンプレックス" has a
    song id ending in a Japanese qualifier that no folder name contains.
    """
    m = UTAGE_NAME_RE.match(entry.title) or UTAGE_NAME_RE.match(entry.song_id)
    if not m:
        return None
    return m.group(1)


class UtageResolver:
    """Resolves utage feed entries against a CandidateIndex."""

    def __init__(self, index, rules=UTAGE_NAME_RULES, tier_filters=UTAGE_TIER_FILTERS):
        self.index = index
        self.rules = rules
        self.tier_filters = tier_filters
        self.utage_names = [n for n in index.names() if UTAGE_NAME_RE.match(n)]

    def existing_names(self, base_name):
        """Utage folder names containing ``base_name``."""
        return [n for n in self.utage_names if base_name in n]

    def synthesized_name(self, base_name, difficulty):
        """First rule-built folder name that exists in the index, or None."""
        for rule in self.rules:
            name = rule(base_name, difficulty)
            if name is not None and self.index.lookup_name(name) is not None:
                return name
        return None

    def _filter_tier(self, song_id, names):
        for id_suffix, name_suffix in self.tier_filters:
            if song_id.endswith(id_suffix):
                return [n for n in names if n.endswith(name_suffix)]
        return names

    def resolve(self, entry):
        """Resolve one utage entry to zero or more content ids."""
        base_name = utage_base_name(entry)
        if not base_name:
            return UtageMatch(SKIPPED)

        names = self.existing_names(base_name)
        if not names:
            first = entry.first_sheet
            synthesized = self.synthesized_name(base_name, first.difficulty if first else "")
            if synthesized is not None:
                names = [synthesized]

        if not names:
            return UtageMatch(LIKELY_NOT_INDEXED, base_name)

        names = self._filter_tier(entry.song_id, names)
        content_ids = []
        for name in names:
            content_id = self.index.lookup_name(name)
            if content_id and content_id not in content_ids:
                content_ids.append(content_id)

        if not content_ids:
            return UtageMatch(INDEXED_BUT_UNRESOLVED, base_name)
        return UtageMatch(MATCHED, base_name, content_ids)
