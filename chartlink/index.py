"""Candidate index over the content catalog (Drive folder name → folder id).

Lookup tiers, first hit wins:
1. Exact song id
2. Exact title
3. Normalized song id key
4. Normalized title key

Exact names outrank keys because several folder names collapse onto
the same key and only the raw name tells them apart.

Variant lookups ([DX], [ST]) use the same exact tiers with the suffix
appended, but their key tiers go through a separate map built only from
folder names that really end in the suffix.  Normalizing "Fir [ST]"
would otherwise land on the key of a different song called "First".
"""

from chartlink.config import DX_SUFFIX, ST_SUFFIX
from chartlink.normalize import normalize

VARIANT_SUFFIXES = (DX_SUFFIX, ST_SUFFIX)

# ── Key alias patches ─────────────────────────────────────────────────
# (substring of a built key, replacement, replace whole key).  Every key
# containing the substring gets an extra entry for the patched key that
# points at the same folder.  Add rows here; lookup code never changes.
KEY_ALIAS_PATCHES = [
    ("idolratrize", "idoratrize", False),  # "Idolratrize" vs "Idoratrize"
    ("plusdanshi", "♂", True),             # "Plus Danshi" is titled "+♂"
]


def _patched_key(key, substring, replacement, whole_key):
    if whole_key:
        return replacement
    return key.replace(substring, replacement)


def split_variant(name, suffixes=VARIANT_SUFFIXES):
    """Split a folder name into ``(base name, suffix)``.

    The suffix is one of ``suffixes`` when the name ends in its bracketed
    tag, else "".
    """
    for suffix in suffixes:
        tag = suffix.strip()
        if name.endswith(tag) and len(name) > len(tag):
            return name[:-len(tag)], suffix
    return name, ""


class CandidateIndex:
    """Read-only name/key → content id maps, built once per run."""

    def __init__(self, ids_by_name, ids_by_key, names_by_id, ids_by_variant=None):
        self._ids_by_name = ids_by_name
        self._ids_by_key = ids_by_key
        self._names_by_id = names_by_id
        self._ids_by_variant = ids_by_variant or {}

    @classmethod
    def build(cls, entries, patches=KEY_ALIAS_PATCHES):
        """Build from ``(display_name, content_id)`` pairs.

        Later duplicates of a name or key overwrite earlier ones.
        """
        ids_by_name = {}
        ids_by_key = {}
        ids_by_variant = {}   # (base key, suffix) → id
        names_by_id = {}
        for name, content_id in entries:
            ids_by_name[name] = content_id
            names_by_id[content_id] = name
            key = normalize(name)
            if key:
                ids_by_key[key] = content_id
            base_name, suffix = split_variant(name)
            base_key = normalize(base_name)
            if suffix and base_key:
                ids_by_variant[(base_key, suffix)] = content_id

        for key, content_id in list(ids_by_key.items()):
            for substring, replacement, whole_key in patches:
                if substring in key:
                    ids_by_key[_patched_key(key, substring, replacement, whole_key)] = content_id
        for (key, suffix), content_id in list(ids_by_variant.items()):
            for substring, replacement, whole_key in patches:
                if substring in key:
                    patched = _patched_key(key, substring, replacement, whole_key)
                    ids_by_variant[(patched, suffix)] = content_id

        return cls(ids_by_name, ids_by_key, names_by_id, ids_by_variant)

    def __len__(self):
        return len(self._ids_by_name)

    def names(self):
        """All display names, in insertion order."""
        return list(self._ids_by_name)

    def lookup_name(self, name):
        """Exact display name → content id, or None."""
        return self._ids_by_name.get(name)

    def lookup_key(self, key, suffix=""):
        """Normalized key → content id, or None. Empty keys never match.

        With a suffix, only folders whose name ends in that suffix and
        whose base name normalizes to ``key`` are found.
        """
        if not key:
            return None
        if suffix:
            return self._ids_by_variant.get((key, suffix))
        return self._ids_by_key.get(key)

    def name_for(self, content_id):
        """Display name of a content id."""
        return self._names_by_id[content_id]

    def lookup(self, song_id, title, suffix=""):
        """Run the four lookup tiers for ``song_id``/``title`` + ``suffix``."""
        return (
            self.lookup_name(song_id + suffix)
            or self.lookup_name(title + suffix)
            or self.lookup_key(normalize(song_id), suffix)
            or self.lookup_key(normalize(title), suffix)
        )

    def as_dict(self):
        """Copy of the name, key and variant maps, for comparing two builds."""
        return {
            "names": dict(self._ids_by_name),
            "keys": dict(self._ids_by_key),
            "variants": dict(self._ids_by_variant),
        }


def song_likely_in_index(index, song_id, title):
    """True if the raw song id/title or either key appears anywhere in the index."""
    if index.lookup_name(song_id) is not None or index.lookup_name(title) is not None:
        return True
    return (index.lookup_key(normalize(song_id)) is not None
            or index.lookup_key(normalize(title)) is not None)


def expand_variants(index, song_id, title):
    """Return ``(base_id, dx_id, st_id)`` for a standard song.

    Missing folders are None; most songs only have the untagged base
    folder.  A variant that resolves back to an id already returned is
    dropped.
    """
    base = index.lookup(song_id, title)
    dx = index.lookup(song_id, title, DX_SUFFIX)
    st = index.lookup(song_id, title, ST_SUFFIX)
    if dx is not None and dx == base:
        dx = None
    if st is not None and st in (base, dx):
        st = None
    return base, dx, st
