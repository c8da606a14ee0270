"""
Bucketwise Strategy Layer - Planner

Chains the rebalancing steps for one directory:

    entries → build_buckets → resolve_threshold → split → combine → BucketPlan

The planner never touches the filesystem; executor.py turns the plan into
folders and moves.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List

from bucketwise.analyze.scanner import build_buckets
from bucketwise.schemas import Bucket, BucketPlan, BucketTable, Entry, SortOptions
from .combiner import combine_buckets
from .splitter import split_buckets
from .threshold import resolve_threshold


def render_folder_name(key: str, count: int, options: SortOptions) -> str:
    """
    Folder name for a bucket: case first, then the count, then prefix/suffix.

    >>> render_folder_name("a-c", 12, SortOptions(upper=True, include_count=True, prefix="_"))
    '_A-C [12]'
    """
    name = key.upper() if options.upper else key
    if options.include_count:
        name = f"{name} [{count}]"
    return f"{options.prefix}{name}{options.suffix}"


def rebalance(table: BucketTable, threshold: int, options: SortOptions) -> BucketTable:
    """Apply the enabled split/combine steps to `table` in place."""
    if options.split:
        split_buckets(table, threshold)
    if options.combine:
        combine_buckets(table, threshold)
    return table


def build_plan(root: Path, entries: Iterable[Entry], options: SortOptions) -> BucketPlan:
    """
    Build the rebalanced bucket plan for the files of `root`.

    Buckets that end up empty (pre-seeded keys nobody used and that were
    not merged away) are dropped; they would only produce empty folders.
    """
    scan = build_buckets(entries, include_empty=options.include_empty)
    threshold = resolve_threshold(options.threshold, scan.total)

    table = rebalance(scan.table, threshold, options)

    buckets = [
        Bucket(
            key=key,
            folder_name=render_folder_name(key, len(table[key]), options),
            entries=list(table[key]),
        )
        for key in sorted(table)
        if table[key]
    ]

    return BucketPlan(
        root=Path(root),
        buckets=buckets,
        threshold=threshold,
        total=scan.total,
        skipped=scan.skipped,
    )


def plan_rows(plan: BucketPlan) -> List[Dict[str, Any]]:
    """One row per file, in PLAN_CSV_FIELDS order."""
    rows = []
    for bucket in plan.buckets:
        target_dir = plan.root / bucket.folder_name
        for entry in bucket.entries:
            rows.append({
                "Bucket": bucket.key,
                "Folder": bucket.folder_name,
                "FileCount": bucket.count,
                "SourcePath": str(entry.path),
                "TargetPath": str(target_dir / entry.name),
            })
    return rows


def get_plan_summary(plan: BucketPlan) -> str:
    width = max((len(b.folder_name) for b in plan.buckets), default=0)
    lines = [f"{b.folder_name.ljust(width)}  {b.count} files" for b in plan.buckets]
    lines.append(f"Total files: {plan.total}")
    lines.append(f"  Buckets: {len(plan.buckets)}")
    lines.append(f"  Threshold: {plan.threshold}")
    if plan.skipped:
        lines.append(f"  Skipped (no key): {len(plan.skipped)}")
    return "\n".join(lines)
