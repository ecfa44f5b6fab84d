"""Local file cache helpers (max-age aware reads, atomic writes)."""

import json
import os
import tempfile
import time
from pathlib import Path


def is_fresh(path, max_age_seconds=0):
    """True if ``path`` exists and is younger than max_age_seconds (0 = never expires)."""
    path = Path(path)
    if not path.exists():
        return False
    if max_age_seconds > 0:
        age = time.time() - path.stat().st_mtime
        if age > max_age_seconds:
            return False
    return True


def read_text(path, max_age_seconds=0):
    """Read a cached text file. Returns str, or None if missing, stale or unreadable."""
    if not is_fresh(path, max_age_seconds):
        return None
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def write_text(path, text):
    """Atomically write text to ``path``, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    # Atomic write: write to temp file then rename
    fd, tmp = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def load_json(path):
    """Load a JSON input file. Decode errors propagate."""
    return json.loads(Path(path).read_text(encoding="utf-8"))


def dump_json(path, data):
    """Atomically write ``data`` as tab-indented JSON (non-ASCII kept as-is)."""
    write_text(path, json.dumps(data, ensure_ascii=False, indent="\t"))
