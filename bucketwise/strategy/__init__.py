"""
Bucketwise strategy layer - bucket rebalancing.

This package sits between analyze and execute, providing:
- Threshold resolution
- Splitting of oversized buckets
- Combining of undersized neighbours
- Folder naming and the per-directory plan

Main entry point: planner.build_plan()
"""

from .planner import (
    build_plan,
    rebalance,
    render_folder_name,
    plan_rows,
    get_plan_summary,
)

from .threshold import resolve_threshold

from .splitter import (
    split_keys,
    split_bucket,
    split_buckets,
)

from .combiner import (
    range_key,
    combine_buckets,
)

__all__ = [
    # Main planner
    'build_plan',
    'rebalance',
    'render_folder_name',
    'plan_rows',
    'get_plan_summary',

    # Threshold
    'resolve_threshold',

    # Splitter
    'split_keys',
    'split_bucket',
    'split_buckets',

    # Combiner
    'range_key',
    'combine_buckets',
]
