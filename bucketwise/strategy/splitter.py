"""
Split oversized buckets.

A bucket with more than `threshold` entries is cut into a start half of
exactly `threshold` entries and an end half with the rest. Keys follow the
digit-suffix scheme:

    a   -> a1 (start), a2 (end)
    a2  -> a2 (start), a3 (end)

Only the end half is renamed once a key already carries a number. Because
the start half always holds exactly `threshold` entries, only the highest
numbered half can ever be split again, so the scheme never reuses a key.
"""

import re
from typing import Optional, Tuple

from bucketwise.schemas import BucketTable

_NUMBERED_KEY = re.compile(r"^(.+?)(\d+)$", re.DOTALL)


def split_keys(key: str) -> Tuple[str, str]:
    """Return (start_key, end_key) for splitting `key`."""
    if len(key) == 1:
        return f"{key}1", f"{key}2"

    match = _NUMBERED_KEY.match(key)
    if match:
        stem, number = match.groups()
        return key, f"{stem}{int(number) + 1}"

    return key, f"{key}2"


def _free_end_key(table: BucketTable, start_key: str, end_key: str) -> str:
    # Never overwrite another bucket; keep counting up until the key is free
    while end_key in table and end_key != start_key:
        match = _NUMBERED_KEY.match(end_key)
        if match:
            stem, number = match.groups()
            end_key = f"{stem}{int(number) + 1}"
        else:
            end_key = f"{end_key}2"
    return end_key


def _find_oversized(table: BucketTable, threshold: int) -> Optional[str]:
    for key in list(table):
        if len(table[key]) > threshold:
            return key
    return None


def split_bucket(table: BucketTable, key: str, threshold: int) -> Tuple[str, str]:
    """
    Split one bucket in place. Returns the (start_key, end_key) written.
    """
    entries = table.pop(key)
    start_key, end_key = split_keys(key)
    end_key = _free_end_key(table, start_key, end_key)

    table[start_key] = entries[:threshold]
    table[end_key] = entries[threshold:]
    return start_key, end_key


def split_buckets(table: BucketTable, threshold: int) -> BucketTable:
    """
    Split every bucket larger than `threshold` until none is left.

    Each pass takes a fresh snapshot of the keys and applies at most one
    split, so freshly created halves are checked again on the next pass.
    A threshold of 0 or less disables splitting.
    """
    if threshold <= 0:
        return table

    while True:
        key = _find_oversized(table, threshold)
        if key is None:
            return table
        split_bucket(table, key, threshold)
