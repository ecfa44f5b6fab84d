"""CLI with subcommands for building the merged chart catalog."""

import argparse
import os
import sys
from pathlib import Path

from chartlink import gdrive, majdata, zetaraku
from chartlink.catalog import (
    download_community_names,
    insert_community_names,
    load_catalog,
    parse_community_names,
    write_catalog,
)
from chartlink.config import (
    CATALOG_PATH,
    COMMUNITY_NAMES_PATH,
    CONTENT_INDEX_PATH,
    DRIVE_DEFAULT_WORKERS,
    FEED_PATH,
    MAJDATA_PATH,
    ROMANIZE_DEFAULT_WORKERS,
    ROOT_FOLDER_HTML,
    VERSION_FOLDERS_DIR,
)
from chartlink.index import CandidateIndex
from chartlink.link import link_catalog
from chartlink.report import print_report
from chartlink.romanize import romanize_japanese


def cmd_fetch(args):
    """Download Drive folder pages and the metadata feed into the local cache."""
    print("Fetching Drive folder views...")
    gdrive.download_version_folders(full=args.full, workers=args.workers)
    print("Fetching metadata feed...")
    zetaraku.download_feed(full=args.full)


def cmd_index(args):
    """Parse cached Drive folder pages into the content index."""
    print("Building content index...")
    gdrive.build_content_index()


def cmd_link(args):
    """Match feed entries to content folders and write the catalog."""
    print("Loading inputs...")
    pairs = gdrive.load_content_index()
    entries = zetaraku.load_feed()
    print(f"  {len(pairs)} content folders, {len(entries)} feed entries")

    index = CandidateIndex.build(pairs)
    print("Linking...")
    songs, result = link_catalog(
        entries, index,
        romanize=None if args.no_romanize else romanize_japanese,
        workers=args.workers,
    )
    print_report(songs, result, index.names())

    write_catalog(songs, args.output)
    print(f"\nSaved {len(songs)} songs to {args.output}")


def cmd_names(args):
    """Insert community names (aliases) into an existing catalog."""
    download_community_names(full=args.full)
    names = parse_community_names(Path(COMMUNITY_NAMES_PATH).read_text(encoding="utf-8"))
    songs = load_catalog(args.output)
    updated = insert_community_names(songs, names)
    write_catalog(songs, args.output)
    print(f"  {updated}/{len(songs)} songs have community names -> {args.output}")


def cmd_majdata(args):
    """Append Majdata.net charts to an existing catalog."""
    majdata.download_majdata(full=args.full)
    charts = majdata.load_majdata()
    songs = load_catalog(args.output)
    songs = majdata.append_majdata(
        songs, charts,
        romanize=None if args.no_romanize else romanize_japanese,
        workers=args.workers,
    )
    write_catalog(songs, args.output)
    print(f"  Appended {len(charts)} Majdata charts, {len(songs)} records -> {args.output}")


def _describe(path):
    if not os.path.exists(path):
        return "missing"
    return f"{os.path.getsize(path):,} bytes"


def cmd_status(args):
    """Show what is cached locally."""
    pages = list(Path(VERSION_FOLDERS_DIR).glob("*.html"))
    print(f"  Root folder page:     {_describe(ROOT_FOLDER_HTML)}")
    print(f"  Version folder pages: {len(pages)}")
    print(f"  Content index:        {_describe(CONTENT_INDEX_PATH)}")
    print(f"  Metadata feed:        {_describe(FEED_PATH)}")
    print(f"  Community names:      {_describe(COMMUNITY_NAMES_PATH)}")
    print(f"  Majdata list:         {_describe(MAJDATA_PATH)}")
    print(f"  Catalog ({args.output}): {_describe(args.output)}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="chartlink",
        description="Merge the maimai song feed with the converted-chart Drive index",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # fetch
    p_fetch = subparsers.add_parser("fetch", help="Download Drive pages and the feed")
    p_fetch.add_argument("--full", action="store_true",
                         help="Re-download everything (ignore the cache)")
    p_fetch.add_argument("--workers", type=int, default=DRIVE_DEFAULT_WORKERS,
                         help=f"Parallel page downloads (default: {DRIVE_DEFAULT_WORKERS})")
    p_fetch.set_defaults(func=cmd_fetch)

    # index
    p_index = subparsers.add_parser("index", help="Build the content index from cached pages")
    p_index.set_defaults(func=cmd_index)

    # link
    p_link = subparsers.add_parser("link", help="Link feed entries and write the catalog")
    p_link.add_argument("-o", "--output", default=CATALOG_PATH,
                        help=f"Catalog file (default: {CATALOG_PATH})")
    p_link.add_argument("--no-romanize", action="store_true",
                        help="Skip romaji fields")
    p_link.add_argument("--workers", type=int, default=ROMANIZE_DEFAULT_WORKERS,
                        help=f"Romanization threads (default: {ROMANIZE_DEFAULT_WORKERS})")
    p_link.set_defaults(func=cmd_link)

    # names
    p_names = subparsers.add_parser("names", help="Insert community names into the catalog")
    p_names.add_argument("-o", "--output", default=CATALOG_PATH,
                         help=f"Catalog file (default: {CATALOG_PATH})")
    p_names.add_argument("--full", action="store_true",
                         help="Re-download the alias sheet")
    p_names.set_defaults(func=cmd_names)

    # majdata
    p_majdata = subparsers.add_parser("majdata", help="Append Majdata.net charts to the catalog")
    p_majdata.add_argument("-o", "--output", default=CATALOG_PATH,
                           help=f"Catalog file (default: {CATALOG_PATH})")
    p_majdata.add_argument("--full", action="store_true",
                           help="Re-download the chart list")
    p_majdata.add_argument("--no-romanize", action="store_true",
                           help="Skip romaji fields")
    p_majdata.add_argument("--workers", type=int, default=ROMANIZE_DEFAULT_WORKERS,
                           help=f"Romanization threads (default: {ROMANIZE_DEFAULT_WORKERS})")
    p_majdata.set_defaults(func=cmd_majdata)

    # status
    p_status = subparsers.add_parser("status", help="Show cached inputs")
    p_status.add_argument("-o", "--output", default=CATALOG_PATH,
                          help=f"Catalog file (default: {CATALOG_PATH})")
    p_status.set_defaults(func=cmd_status)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)
