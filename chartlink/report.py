"""Post-link diagnostics: unclaimed folders and unmatched feed entries."""

from chartlink.config import INDEXED_BUT_UNRESOLVED, LIKELY_NOT_INDEXED, UNCOLLECTED_SUFFIXES
from chartlink.link import STANDARD, UTAGE


def uncollected_folders(folder_names, songs, suffixes=UNCOLLECTED_SUFFIXES):
    """Per suffix, folder names ending in it that no catalog record uses.

    Returns ``{suffix: [name, ...]}`` with names in index order.
    """
    collected = {song["title"] for song in songs}
    return {
        suffix: [n for n in folder_names if n.endswith(suffix) and n not in collected]
        for suffix in suffixes
    }


def summarize(songs, result):
    """Counts for the run as a flat dict."""
    return {
        "matched": len(songs),
        "standard_entries": result.entries_processed[STANDARD],
        "standard_songs": len(result.links_of_kind(STANDARD)),
        "utage_entries": result.entries_processed[UTAGE],
        "utage_songs": len(result.links_of_kind(UTAGE)),
        "skipped": len(result.skipped),
        "duplicates": len(result.duplicates),
        "unresolved": len(result.not_found(INDEXED_BUT_UNRESOLVED)),
        "not_indexed": len(result.not_found(LIKELY_NOT_INDEXED)),
    }


def _print_ids(header, song_ids):
    if not song_ids:
        return
    print(f"\n  {header}:")
    for song_id in song_ids:
        print(f"    '{song_id}'")
    print(f"  Total: {len(song_ids)}")


def print_report(songs, result, folder_names):
    """Print the link summary to stdout."""
    for suffix, names in uncollected_folders(folder_names, songs).items():
        if names:
            print(f"  Uncollected {suffix} folders ({len(names)}):")
            for name in names:
                print(f"    - {name}")
        else:
            print(f"  Uncollected {suffix} folders: none")

    counts = summarize(songs, result)
    print(f"\n  Total matched songs:  {counts['matched']}")
    print(f"  Standard entries:     {counts['standard_entries']} "
          f"({counts['standard_songs']} songs)")
    print(f"  Utage entries:        {counts['utage_entries']} "
          f"({counts['utage_songs']} songs)")
    if counts["skipped"]:
        print(f"  Utage without marker: {counts['skipped']} (skipped)")

    if result.duplicates:
        print("\n  Folders claimed by more than one feed entry (first claim kept):")
        for song_id, content_id in result.duplicates:
            print(f"    '{song_id}' → {content_id}")

    _print_ids("Found in the content index but could not match",
               result.not_found(INDEXED_BUT_UNRESOLVED))
    _print_ids("Probably not converted yet",
               result.not_found(LIKELY_NOT_INDEXED))
