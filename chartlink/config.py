"""Constants, lookup tables, and source URLs."""

import os

# ── Paths ──────────────────────────────────────────────────────────────
DATA_DIR = os.path.expanduser("~/.chartlink")
ROOT_FOLDER_HTML = os.path.join(DATA_DIR, "root-folder.html")
VERSION_FOLDERS_DIR = os.path.join(DATA_DIR, "version-folders")
CONTENT_INDEX_PATH = os.path.join(DATA_DIR, "songName2folderId.json")
FEED_PATH = os.path.join(DATA_DIR, "zetaraku.json")
COMMUNITY_NAMES_PATH = os.path.join(DATA_DIR, "community-names.tsv")
MAJDATA_PATH = os.path.join(DATA_DIR, "majdata.json")

# The merged catalog is meant to be committed alongside the project.
CATALOG_PATH = "songs.json"

# ── Google Drive (content index) ──────────────────────────────────────
# Root "maisquared" folder; its subfolders are named "<n>. <version name>".
DRIVE_ROOT_FOLDER_ID = "1NiZ9rL19qKLqt0uNcP5tIqc0fUrksAPs"
DRIVE_EMBED_URL = "https://drive.google.com/embeddedfolderview"
DRIVE_DEFAULT_WORKERS = 8
# Links to files (not folders) in an embedded folder view end with this.
DRIVE_FILE_HREF_SUFFIX = "view?usp=drive_web"

# ── Metadata feed ─────────────────────────────────────────────────────
FEED_URL = "https://dp4p6x0xfi5o9.cloudfront.net/maimai/data.json"

# ── Majdata (community charts without a Drive folder) ─────────────────
MAJDATA_URL = "https://majdata.net/api3/api/maichart/list"

# ── Community names (GCM-bot alias sheet) ─────────────────────────────
COMMUNITY_NAMES_URL = (
    "https://github.com/lomotos10/GCM-bot/raw/refs/heads/main/data/aliases/en/maimai.tsv"
)
# Feed song id → key used by the alias sheet, where the two disagree.
COMMUNITY_NAME_KEYS = {
    "Link": "Link (maimai)",
    "Link (2)": "Link",
}

# ── HTTP ──────────────────────────────────────────────────────────────
USER_AGENT = "ChartLinkBot/1.0 (maimai chart catalog builder)"
RATE_LIMIT = 0.25  # seconds between requests
MAX_RETRIES = 3

# ── Romanization ──────────────────────────────────────────────────────
ROMANIZE_DEFAULT_WORKERS = 4

# ── Chart types ───────────────────────────────────────────────────────
CHART_TYPE_STD = "std"
CHART_TYPE_DX = "dx"
CHART_TYPE_UTAGE = "utage"

# Placeholder the feed uses for an unknown note designer.
DESIGNER_PLACEHOLDER = "-"

# ── Variant suffixes ──────────────────────────────────────────────────
# Alternate chart engines, looked up for every standard song.
DX_SUFFIX = " [DX]"
ST_SUFFIX = " [ST]"

# Suffix families checked for content folders no feed entry claimed.
UNCOLLECTED_SUFFIXES = ["[DX]", "[ST]", "[1P]", "[2P]", "[EASY]", "[HARD]"]

# ── Match classification ──────────────────────────────────────────────
# No trace of the song anywhere in the content index.
LIKELY_NOT_INDEXED = "LikelyNotIndexed"
# The index clearly has the song, but no folder id could be settled on.
INDEXED_BUT_UNRESOLVED = "IndexedButUnresolved"
