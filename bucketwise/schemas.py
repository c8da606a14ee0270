"""
Bucketwise Data Schemas - Single Source of Truth

All data structures shared by the analyze, strategy and execute layers live
here, together with the events the core emits to its report sink.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional


# ============================================================================
# SCAN OUTPUT (Analyze Layer → Strategy Layer)
# ============================================================================

@dataclass(frozen=True)
class Entry:
    """
    A single file found in the directory being sorted.

    Used by: scanner.py → splitter.py / combiner.py → executor.py
    """
    path: Path  # Absolute source path
    name: str  # Base name (what the bucket key is derived from)

    @classmethod
    def from_path(cls, path: Path) -> 'Entry':
        path = Path(path)
        return cls(path=path, name=path.name)


# Bucket key -> entries, insertion ordered. Mutated in place while rebalancing.
BucketTable = Dict[str, List[Entry]]


@dataclass
class ScanResult:
    """Output of the bucket builder."""
    table: BucketTable
    total: int  # Number of entries that received a bucket
    skipped: List[Entry] = field(default_factory=list)


# ============================================================================
# STRATEGY OUTPUT (Strategy Layer → Execution)
# ============================================================================

@dataclass
class Bucket:
    """
    A final, rendered bucket: the key, the folder it becomes and its files.

    Used by: planner.py → executor.py
    """
    key: str
    folder_name: str
    entries: List[Entry]

    @property
    def count(self) -> int:
        return len(self.entries)


@dataclass
class BucketPlan:
    """Rebalanced bucket plan for a single directory."""
    root: Path
    buckets: List[Bucket]  # Ascending key order
    threshold: int
    total: int
    skipped: List[Entry] = field(default_factory=list)

    @property
    def is_noop(self) -> bool:
        # Fewer than two buckets: nothing to sort into
        return len(self.buckets) < 2


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class SortOptions:
    """
    Options bundle for one sort run.

    Used by: commands/sort.py → planner.py, executor.py
    """
    path: Optional[Path] = None
    force: bool = False  # Skip the confirmation prompt
    include_empty: bool = False  # Pre-seed 0-9 and a-z buckets
    combine: bool = False
    split: bool = False
    dry_run: bool = False
    recurse: bool = False
    max_depth: int = 2
    current_depth: int = 0
    upper: bool = False
    include_count: bool = False
    prefix: str = ""
    suffix: str = ""
    threshold: int = 0  # 0 = derive from the file count
    journal: bool = False

    def descend(self, path: Optional[Path] = None) -> 'SortOptions':
        """Options for a recursive run one level further down."""
        return replace(
            self,
            path=path if path is not None else self.path,
            current_depth=self.current_depth + 1,
            force=True,
        )

    @property
    def can_descend(self) -> bool:
        return self.recurse and self.current_depth < self.max_depth


@dataclass
class SortSummary:
    """Counters accumulated over a run and all of its recursive runs."""
    runs: int = 0
    folders: int = 0
    moved: int = 0
    failed: int = 0
    skipped: int = 0

    def absorb(self, other: 'SortSummary') -> None:
        self.runs += other.runs
        self.folders += other.folders
        self.moved += other.moved
        self.failed += other.failed
        self.skipped += other.skipped


# ============================================================================
# REPORT EVENTS (Core → CLI / Journal)
# ============================================================================

@dataclass
class PreviewReady:
    root: Path
    buckets: List[Bucket]
    threshold: int


@dataclass
class NoChangesNeeded:
    root: Path


@dataclass
class FolderCreated:
    path: Path
    depth: int = 0  # Recursion depth of the run that emitted it


@dataclass
class FolderCreateFailed:
    path: Path
    reason: str
    depth: int = 0


@dataclass
class FileMoved:
    src: Path
    dst: Path
    depth: int = 0


@dataclass
class FileMoveFailed:
    src: Path
    dst: Path
    reason: str
    depth: int = 0


@dataclass
class EntrySkipped:
    path: Path
    reason: str
    depth: int = 0


@dataclass
class SubtreeFailed:
    path: Path
    reason: str
    depth: int = 0


# ============================================================================
# CONSTANTS
# ============================================================================

# Keys pre-seeded when empty buckets are requested
DEFAULT_KEYS = [str(d) for d in range(10)] + [chr(c) for c in range(ord("a"), ord("z") + 1)]

# Auto threshold is this fraction of the file count, rounded up
AUTO_THRESHOLD_DIVISOR = 10

# Hidden state directory (journal, exported plans)
STATE_DIR_NAME = ".bucketwise"

# Config file looked up in the sorted directory when --config is not given
CONFIG_FILE_NAME = "bucketwise.yaml"

# CSV field order for Plan.csv
PLAN_CSV_FIELDS = [
    "Bucket",
    "Folder",
    "FileCount",
    "SourcePath",
    "TargetPath",
]

# CSV field order for journal.log
JOURNAL_FIELDS = [
    "Timestamp",
    "Operation",
    "SourcePath",
    "DestPath",
    "Status",
    "Details",
    "Depth",
]
