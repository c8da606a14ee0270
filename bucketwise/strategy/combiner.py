"""
Merge undersized neighbouring buckets.

Keys are visited in ascending order. The first adjacent pair whose combined
size is strictly below the threshold is merged into a range bucket named
after the outermost fragments (`x` + `y` -> `x-y`, `x-y` + `z` -> `x-z`),
then the scan restarts from the beginning.
"""

from typing import Dict, Optional, Tuple

from bucketwise.schemas import BucketTable

Span = Tuple[str, str]


def range_key(first: str, last: str) -> str:
    return f"{first}-{last}"


def _find_mergeable(table: BucketTable, threshold: int) -> Optional[Tuple[str, str]]:
    keys = sorted(table)
    for left, right in zip(keys, keys[1:]):
        if len(table[left]) + len(table[right]) < threshold:
            return left, right
    return None


def combine_buckets(
        table: BucketTable,
        threshold: int,
        spans: Optional[Dict[str, Span]] = None,
) -> BucketTable:
    """
    Merge adjacent buckets in place until no pair fits under `threshold`.

    Args:
        table: Bucket table to rebalance
        threshold: Combined size must stay strictly below this to merge
        spans: Optional {key: (first_fragment, last_fragment)}; keys not
            listed are their own single fragment

    Returns:
        The same table
    """
    if threshold <= 0 or len(table) < 2:
        return table

    # Track fragments explicitly so keys containing '-' never get re-parsed
    spans = dict(spans or {})
    for key in table:
        spans.setdefault(key, (key, key))

    while True:
        pair = _find_mergeable(table, threshold)
        if pair is None:
            return table

        left, right = pair
        merged_span = (spans.pop(left)[0], spans.pop(right)[1])
        merged_key = range_key(*merged_span)

        entries = table.pop(left) + table.pop(right)
        table[merged_key] = entries
        spans[merged_key] = merged_span
