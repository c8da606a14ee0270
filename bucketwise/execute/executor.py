import os
import shutil
from pathlib import Path
from typing import Callable, List, Optional

from bucketwise.analyze.scanner import list_entries
from bucketwise.errors import AbortedByUser, DirectoryCreateFailure, MoveFailure
from bucketwise.schemas import (
    Bucket,
    BucketPlan,
    Entry,
    EntrySkipped,
    FileMoved,
    FileMoveFailed,
    FolderCreated,
    FolderCreateFailed,
    NoChangesNeeded,
    PreviewReady,
    SortOptions,
    SortSummary,
    SubtreeFailed,
)
from bucketwise.strategy.planner import build_plan

Sink = Callable[[object], None]
Confirm = Callable[[BucketPlan], bool]


def _discard(event) -> None:
    pass


def _always_yes(plan: BucketPlan) -> bool:
    return True


def move_entry(entry: Entry, dest_dir: Path) -> Path:
    """
    Move one file into `dest_dir`, keeping its name.

    Never overwrites: an existing file at the destination is a MoveFailure,
    as is any OSError raised by the move itself.
    """
    dst = dest_dir / entry.name
    if dst.exists():
        raise MoveFailure(entry.path, dst, "destination already exists")

    try:
        shutil.move(str(entry.path), str(dst))
    except (OSError, shutil.Error) as e:
        raise MoveFailure(entry.path, dst, str(e)) from e
    return dst


def create_folder(path: Path) -> Path:
    """Create a bucket folder; an existing directory is fine."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreateFailure(path, str(e)) from e
    return path


def bucket_folder(root: Path, folder_name: str) -> Optional[Path]:
    """
    Folder for a bucket directly inside `root`, or None when the name would
    point at `root` itself or outside it ('.', '..', names with separators).
    """
    if folder_name in ("", ".", ".."):
        return None
    for sep in (os.sep, os.altsep, "/"):
        if sep and sep in folder_name:
            return None
    folder = root / folder_name
    if folder.resolve().parent != root.resolve():
        return None
    return folder


def _materialize_bucket(root: Path, bucket: Bucket, sink: Sink, summary: SortSummary, depth: int) -> Optional[Path]:
    folder = bucket_folder(root, bucket.folder_name)
    if folder is None:
        for entry in bucket.entries:
            sink(EntrySkipped(entry.path, f"unusable folder name '{bucket.folder_name}'", depth))
            summary.skipped += 1
        return None

    try:
        create_folder(folder)
    except DirectoryCreateFailure as e:
        sink(FolderCreateFailed(e.path, e.reason, depth))
        summary.failed += bucket.count
        return None

    sink(FolderCreated(folder, depth))
    summary.folders += 1

    for entry in bucket.entries:
        try:
            dst = move_entry(entry, folder)
        except MoveFailure as e:
            sink(FileMoveFailed(e.src, e.dst, e.reason, depth))
            summary.failed += 1
            continue
        sink(FileMoved(entry.path, dst, depth))
        summary.moved += 1

    return folder


def materialize(
        plan: BucketPlan,
        options: SortOptions,
        sink: Sink = _discard,
        confirm: Confirm = _always_yes,
        summary: Optional[SortSummary] = None,
) -> List[Path]:
    """
    Turn a bucket plan into folders and file moves.

    Args:
        plan: Rebalanced plan for one directory
        options: Sort options (dry_run, force are used here)
        sink: Receives one event per preview / folder / move / failure
        confirm: Asked once before any write unless dry_run or force is set
        summary: Optional counters to update

    Returns:
        Folders that were created (or already existed) and received files.
        Always empty for a dry run or a no-op plan.

    Raises:
        AbortedByUser: confirm() declined; nothing was written
    """
    if summary is None:
        summary = SortSummary()

    for entry in plan.skipped:
        sink(EntrySkipped(entry.path, "empty file name", options.current_depth))
        summary.skipped += 1

    if plan.is_noop:
        sink(NoChangesNeeded(plan.root))
        return []

    sink(PreviewReady(plan.root, plan.buckets, plan.threshold))

    if options.dry_run:
        return []

    if not options.force and not confirm(plan):
        raise AbortedByUser(f"sorting of {plan.root} aborted at confirmation")

    created: List[Path] = []
    for bucket in plan.buckets:
        folder = _materialize_bucket(plan.root, bucket, sink, summary, options.current_depth)
        if folder is not None:
            created.append(folder)
    return created


def sort_directory(
        root: Path,
        options: SortOptions,
        sink: Sink = _discard,
        confirm: Confirm = _always_yes,
) -> SortSummary:
    """
    Sort the files of `root` into bucket folders, then optionally recurse.

    Recursion is depth-first: each created folder is fully sorted (including
    its own subfolders) before the next sibling. Children run with force set
    and depth + 1, and stop once current_depth reaches max_depth.

    Raises:
        OSError: `root` could not be listed
        AbortedByUser: the top-level confirmation was declined
    """
    root = Path(root).resolve()
    summary = SortSummary(runs=1)

    entries = list_entries(root)
    plan = build_plan(root, entries, options)
    created = materialize(plan, options, sink, confirm, summary)

    if not options.can_descend:
        return summary

    for folder in created:
        child_options = options.descend(folder)
        try:
            child = sort_directory(folder, child_options, sink, confirm)
        except OSError as e:
            sink(SubtreeFailed(folder, str(e), child_options.current_depth))
            continue
        summary.absorb(child)

    return summary
