"""Japanese → romaji for titles, artists and designers.

pykakasi converters are not shared between threads; each worker thread
builds its own on first use.
"""

import re
import threading
from concurrent.futures import ThreadPoolExecutor

import pykakasi

from chartlink.config import ROMANIZE_DEFAULT_WORKERS

# Kana, CJK ideographs (incl. extension A and compatibility block).
_JAPANESE_RE = re.compile("[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff]")

_thread_local = threading.local()


def _converter():
    """Get or create a thread-local pykakasi converter."""
    if not hasattr(_thread_local, "kakasi"):
        _thread_local.kakasi = pykakasi.kakasi()
    return _thread_local.kakasi


def has_japanese(text):
    """True if ``text`` contains any kana or kanji."""
    return bool(text) and _JAPANESE_RE.search(text) is not None


def romanize_japanese(text):
    """Passport-system romaji, one space between converted segments."""
    parts = [item["passport"] for item in _converter().convert(text)]
    return re.sub(r"\s+", " ", " ".join(p for p in parts if p)).strip()


def romanize_all(texts, romanize=romanize_japanese, workers=ROMANIZE_DEFAULT_WORKERS):
    """Romanize every distinct Japanese string in ``texts``.

    Returns a ``{text: romaji}`` dict.  Strings without Japanese are left
    out.  The first exception raised by ``romanize`` propagates.
    """
    pending = []
    for text in texts:
        if has_japanese(text) and text not in pending:
            pending.append(text)
    if not pending:
        return {}
    if workers <= 1:
        return {text: romanize(text) for text in pending}
    with ThreadPoolExecutor(max_workers=workers) as pool:
        # map() yields in submission order and re-raises worker errors
        return dict(zip(pending, pool.map(romanize, pending)))
