"""Song name → comparison key.

Key pipeline (order matters):
1. Unicode NFC (the Drive folder names and the feed disagree on whether
   dakuten/handakuten are combined with their kana)
2. Lowercase
3. Full-width ASCII forms → half-width
4. Greek stand-ins → Latin (KHYMΞXΛ is spelled both ways)
5. Known spelling differences between the two catalogs
6. Drop everything but ASCII alphanumerics, kana, CJK, Greek, math
   operators, and ♂

Keys are only ever compared to other keys; they are never displayed.
"""

import re
import unicodedata

# U+FF01..U+FF5E map onto U+0021..U+007E.
_FULLWIDTH_RE = re.compile("[\uff01-\uff5e]")
_FULLWIDTH_OFFSET = 0xFEE0

# ── Character substitutions ───────────────────────────────────────────
GREEK_STAND_INS = {
    "ξ": "e",
    "λ": "a",
}

# ── Spelling corrections ──────────────────────────────────────────────
# (spelling found in one catalog, spelling used for the key).  Applied
# after lowercasing, as plain substring replacements.
SPELLING_CORRECTIONS = [
    ("アンバークロニカル", "アンバークロニクル"),  # "cal" vs "cle"
]

_DISALLOWED_RE = re.compile(
    "[^a-z0-9"
    "\u3040-\u309f"  # hiragana
    "\u30a0-\u30ff"  # katakana
    "\u4e00-\u9faf"  # CJK ideographs
    "\u0370-\u03ff"  # greek
    "\u2200-\u22ff"  # mathematical operators
    "\u2642]"  # ♂
)


def _halfwidth(m):
    return chr(ord(m.group(0)) - _FULLWIDTH_OFFSET)


def normalize(name):
    """Return the comparison key for a display name or song id.

    May return "" for names made only of punctuation; callers treat an
    empty key as a miss.
    """
    if not name:
        return ""
    s = unicodedata.normalize("NFC", name)
    s = s.lower()
    s = _FULLWIDTH_RE.sub(_halfwidth, s)
    for greek, latin in GREEK_STAND_INS.items():
        s = s.replace(greek, latin)
    for wrong, right in SPELLING_CORRECTIONS:
        s = s.replace(wrong, right)
    return _DISALLOWED_RE.sub("", s)
