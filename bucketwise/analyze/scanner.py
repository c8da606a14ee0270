"""
Directory scanning and initial bucket assignment.

The scanner only looks at the immediate files of one directory; it never
walks into subdirectories, so folders created by an earlier run are left
alone.
"""

from pathlib import Path
from typing import Iterable, List

from bucketwise.errors import EmptyNameError
from bucketwise.schemas import CONFIG_FILE_NAME, DEFAULT_KEYS, BucketTable, Entry, ScanResult
from .keys import derive_key


def list_entries(directory: Path) -> List[Entry]:
    """
    Return the regular files directly inside `directory`, sorted by name.
    The directory's own bucketwise.yaml is not an entry.

    Raises the underlying OSError (FileNotFoundError, NotADirectoryError,
    PermissionError) if the directory cannot be listed.
    """
    directory = Path(directory).resolve()
    entries = [
        Entry.from_path(p)
        for p in directory.iterdir()
        if p.is_file() and p.name != CONFIG_FILE_NAME
    ]
    entries.sort(key=lambda e: e.name)
    return entries


def build_buckets(entries: Iterable[Entry], include_empty: bool = False) -> ScanResult:
    """
    Group entries by their bucket key.

    Args:
        entries: Entries in the order they should appear inside each bucket
        include_empty: Pre-seed every key in 0-9 and a-z, even if no file uses it

    Returns:
        ScanResult with the table, the number of assigned entries and any
        entries that could not be assigned (empty names)
    """
    table: BucketTable = {}
    if include_empty:
        for key in DEFAULT_KEYS:
            table[key] = []

    total = 0
    skipped: List[Entry] = []

    for entry in entries:
        try:
            key = derive_key(entry.name)
        except EmptyNameError:
            skipped.append(entry)
            continue

        table.setdefault(key, []).append(entry)
        total += 1

    return ScanResult(table=table, total=total, skipped=skipped)
