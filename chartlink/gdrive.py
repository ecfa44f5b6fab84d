"""Google Drive embedded folder views → content index.

Pipeline:
1. Fetch the root folder view (cached); its subfolders are versions
2. Fetch every version folder view to the cache, in parallel.  Drive
   serves embeddedfolderview pages slowly, so downloading and parsing
   are separate steps
3. Parse all cached version pages into one ``{folder name: folder id}``
   map and write it as the content index
"""

import threading
import time
import unicodedata
from concurrent.futures import ThreadPoolExecutor, as_completed
from html.parser import HTMLParser
from pathlib import Path

from chartlink import cache
from chartlink.config import (
    CONTENT_INDEX_PATH,
    DRIVE_DEFAULT_WORKERS,
    DRIVE_EMBED_URL,
    DRIVE_FILE_HREF_SUFFIX,
    DRIVE_ROOT_FOLDER_ID,
    ROOT_FOLDER_HTML,
    VERSION_FOLDERS_DIR,
)
from chartlink.http_utils import create_session, get_text_with_retry, progress_line


class _FlipEntryParser(HTMLParser):
    """Collect (href, title) for every ``.flip-entry`` block.

    href is the first link inside the entry, title the text of its
    ``.flip-entry-title`` div.
    """

    def __init__(self):
        super().__init__()
        self.entries = []
        self._depth = 0
        self._entry_depth = None
        self._title_depth = None
        self._href = None
        self._title = []
        self._title_seen = False

    def handle_starttag(self, tag, attrs):
        if tag == "a":
            if self._entry_depth is not None and self._href is None:
                self._href = dict(attrs).get("href") or ""
            return
        if tag != "div":
            return
        self._depth += 1
        classes = (dict(attrs).get("class") or "").split()
        if self._entry_depth is None:
            if "flip-entry" in classes:
                self._entry_depth = self._depth
                self._href = None
                self._title = []
                self._title_seen = False
        elif (self._title_depth is None and not self._title_seen
              and "flip-entry-title" in classes):
            self._title_depth = self._depth

    def handle_endtag(self, tag):
        if tag != "div":
            return
        if self._title_depth == self._depth:
            self._title_depth = None
            self._title_seen = True
        if self._entry_depth == self._depth:
            self.entries.append((self._href, "".join(self._title)))
            self._entry_depth = None
        self._depth -= 1

    def handle_data(self, data):
        if self._title_depth is not None:
            self._title.append(data)


def parse_drive_folders(html):
    """Parse an embedded folder view into an ordered ``{name: folder_id}`` dict.

    Files, entries without a link or title, and links without an id are
    skipped.  Names are stripped and NFC-normalized.
    """
    parser = _FlipEntryParser()
    parser.feed(html)
    parser.close()

    folders = {}
    for href, title in parser.entries:
        if not href or href.endswith(DRIVE_FILE_HREF_SUFFIX):
            continue
        name = title.strip()
        if not name:
            continue
        # https://drive.google.com/drive/folders/{ID}
        folder_id = href.split("/")[-1]
        if not folder_id:
            continue
        folders[unicodedata.normalize("NFC", name)] = folder_id
    return folders


_thread_local = threading.local()


def _thread_session():
    """Get or create a thread-local requests.Session."""
    if not hasattr(_thread_local, "session"):
        _thread_local.session = create_session()
    return _thread_local.session


def fetch_embedded_folder_view(session, folder_id):
    """HTML of a folder's embedded view. Non-2xx responses raise."""
    return get_text_with_retry(session, DRIVE_EMBED_URL, params={"id": folder_id})


def version_page_path(folders_dir, name):
    """Cache file for one version folder page."""
    return Path(folders_dir) / f"{name.replace('/', '_')}.html"


def _fetch_to_cache(folder_id, path):
    cache.write_text(path, fetch_embedded_folder_view(_thread_session(), folder_id))
    return path


def download_version_folders(root_html_path=ROOT_FOLDER_HTML, folders_dir=VERSION_FOLDERS_DIR,
                             root_folder_id=DRIVE_ROOT_FOLDER_ID, full=False,
                             workers=DRIVE_DEFAULT_WORKERS, verbose=True):
    """Download the root and version folder pages that are not cached yet.

    Any failed download raises once the pool drains; pages already
    written stay cached for the next run.  Returns the number downloaded.
    """
    root_html = None if full else cache.read_text(root_html_path)
    if root_html is None:
        root_html = fetch_embedded_folder_view(create_session(), root_folder_id)
        cache.write_text(root_html_path, root_html)
        if verbose:
            print(f"  Downloaded root folder -> {root_html_path}")
    elif verbose:
        print(f"  Using cached root folder {root_html_path}")

    versions = parse_drive_folders(root_html)
    to_fetch = []
    for name, folder_id in versions.items():
        path = version_page_path(folders_dir, name)
        if full or not path.exists():
            to_fetch.append((folder_id, path))

    if verbose:
        print(f"  {len(versions)} version folders: {len(to_fetch)} to fetch, "
              f"{len(versions) - len(to_fetch)} already cached")
    if not to_fetch:
        return 0

    done = 0
    t_start = time.monotonic()
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {pool.submit(_fetch_to_cache, folder_id, path): path
                   for folder_id, path in to_fetch}
        for future in as_completed(futures):
            future.result()
            done += 1
            if verbose:
                elapsed = time.monotonic() - t_start
                print(f"    {progress_line(done, len(to_fetch), elapsed)} "
                      f"{futures[future].name}")
    return done


def build_content_index(folders_dir=VERSION_FOLDERS_DIR, out_path=CONTENT_INDEX_PATH,
                        verbose=True):
    """Merge every cached version page into one name → id map and write it."""
    folders = {}
    pages = sorted(Path(folders_dir).glob("*.html"))
    for page in pages:
        folders.update(parse_drive_folders(page.read_text(encoding="utf-8")))
    cache.dump_json(out_path, folders)
    if verbose:
        print(f"  Parsed {len(pages)} version pages, {len(folders)} folders -> {out_path}")
    return folders


def load_content_index(path=CONTENT_INDEX_PATH):
    """Content index as ``[(display_name, content_id), ...]``. Bad JSON raises."""
    return list(cache.load_json(path).items())
