import sys
from pathlib import Path

from bucketwise.analyze.scanner import list_entries
from bucketwise.errors import ConfigError
from bucketwise.state.io import write_plan
from bucketwise.strategy import build_plan, get_plan_summary
from .sort import build_options


def run(args):
    """
    Plan a directory without touching it and write Plan.csv.
    """
    try:
        options = build_options(args)
    except ConfigError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    root = options.path
    try:
        entries = list_entries(root)
    except OSError as e:
        print(f"❌ Error: cannot list {root}: {e}")
        sys.exit(1)

    print(f"[bucket] Scanning {root}...")
    print(f"[bucket] Found {len(entries)} files")

    plan = build_plan(root, entries, options)
    out_path = write_plan(plan, Path(args.out) if args.out else None)

    print(get_plan_summary(plan))
    print(f"[bucket] wrote Plan.csv -> {out_path}")
