"""
sort command - plan the buckets of a directory and move its files into them.
"""

import sys
from pathlib import Path

from bucketwise.errors import AbortedByUser, ConfigError
from bucketwise.schemas import (
    BucketPlan,
    EntrySkipped,
    FileMoved,
    FileMoveFailed,
    FolderCreated,
    FolderCreateFailed,
    NoChangesNeeded,
    PreviewReady,
    SortOptions,
    SubtreeFailed,
)
from bucketwise.state.io import find_config, load_config

# argparse dest -> SortOptions field, for flags that can override the config
OPTION_FLAGS = [
    "force",
    "include_empty",
    "combine",
    "split",
    "dry_run",
    "recurse",
    "max_depth",
    "upper",
    "include_count",
    "prefix",
    "suffix",
    "threshold",
    "journal",
]


def build_options(args) -> SortOptions:
    """
    Merge defaults, the YAML config (if any) and explicit CLI flags.

    Flags left at None were not given on the command line and do not
    override the config.
    """
    root = Path(args.path).resolve()
    values = {}

    config_path = find_config(root, getattr(args, "config", None))
    if config_path is not None:
        values.update(load_config(config_path))

    for name in OPTION_FLAGS:
        value = getattr(args, name, None)
        if value is not None:
            values[name] = value

    return SortOptions(path=root, **values)


def render_event(event) -> None:
    """Print one report event in the CLI's line format."""
    if isinstance(event, PreviewReady):
        width = max(len(b.folder_name) for b in event.buckets)
        print(f"\n[bucket] {event.root}  (threshold {event.threshold})")
        for bucket in event.buckets:
            print(f"  {bucket.folder_name.ljust(width)}  {bucket.count} files")
        print("")
    elif isinstance(event, NoChangesNeeded):
        print(f"[bucket] {event.root}: no changes needed")
    elif isinstance(event, FolderCreated):
        print(f"[mkdir] {event.path}")
    elif isinstance(event, FolderCreateFailed):
        print(f"[warn] could not create {event.path}: {event.reason}")
    elif isinstance(event, FileMoved):
        print(f"MOVE: {event.src}  ->  {event.dst}")
    elif isinstance(event, FileMoveFailed):
        print(f"[warn] could not move {event.src} -> {event.dst}: {event.reason}")
    elif isinstance(event, EntrySkipped):
        print(f"[skip] {event.path}: {event.reason}")
    elif isinstance(event, SubtreeFailed):
        print(f"[warn] could not sort {event.path}: {event.reason}")


def ask_confirmation(plan: BucketPlan) -> bool:
    try:
        answer = input(f"Move {plan.total} files into {len(plan.buckets)} folders? [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def run(args):
    """
    Sort command entry point - builds options and runs the sorter.

    Args:
        args: argparse namespace with `path`, `config` and the flags in
            OPTION_FLAGS (None when not given)
    """
    from bucketwise.execute.executor import sort_directory
    from bucketwise.execute.journaling import get_journal

    try:
        options = build_options(args)
    except ConfigError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    root = options.path
    if not root.is_dir():
        print(f"❌ Error: Must be a directory: {root}")
        sys.exit(1)

    sink = render_event
    if options.journal and not options.dry_run:
        journal = get_journal(root)
        print(f"[bucket] journal = {journal.path}")

        def sink(event):
            render_event(event)
            journal(event)

    print(f"\n{'=' * 60}")
    print(f"Sorting: {root}")
    print(
        "  Mode:       "
        + ("DRY RUN (no changes will be made)" if options.dry_run else "LIVE (files will be moved)")
    )
    print(f"  Split:      {'on' if options.split else 'off'}")
    print(f"  Combine:    {'on' if options.combine else 'off'}")
    print(f"  Threshold:  {options.threshold or 'auto'}")
    if options.recurse:
        print(f"  Recurse:    up to depth {options.max_depth}")
    print(f"{'=' * 60}")

    try:
        summary = sort_directory(root, options, sink, ask_confirmation)
    except AbortedByUser:
        print("[bucket] Aborted, nothing was moved.")
        return
    except OSError as e:
        print(f"\n❌ Error: cannot sort {root}: {e}")
        sys.exit(1)

    print(f"\n{'=' * 60}")
    print("Summary:")
    print(f"  Directories sorted:  {summary.runs}")
    print(f"  Folders created:     {summary.folders}")
    print(f"  Files moved:         {summary.moved}")
    print(f"  Failed:              {summary.failed}")
    if summary.skipped:
        print(f"  Skipped:             {summary.skipped}")
    print(f"Mode: {'DRY' if options.dry_run else 'LIVE'}")
    print(f"{'=' * 60}")
