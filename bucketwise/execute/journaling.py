"""
Journaling system for Bucketwise runs.

Appends every filesystem action (folder creation, moves, failures) to
<root>/.bucketwise/journal.log as an audit trail.
"""

import csv
from datetime import datetime
from pathlib import Path
from typing import Optional

from bucketwise.schemas import (
    JOURNAL_FIELDS,
    STATE_DIR_NAME,
    EntrySkipped,
    FileMoved,
    FileMoveFailed,
    FolderCreated,
    FolderCreateFailed,
    SubtreeFailed,
)


class Journal:
    """
    Append-only journal for file operations.

    Journal format (CSV):
    - Timestamp: ISO 8601 datetime
    - Operation: Mkdir | Move | Skip | Error
    - SourcePath: Original file path (or folder for Mkdir)
    - DestPath: Destination path
    - Status: OK | Error | Skipped
    - Details: Error message or skip reason
    - Depth: Recursion depth of the run that did it (0 = the sorted directory)

    A Journal is also a report sink: call it with any event and the
    filesystem-relevant ones are recorded.
    """

    def __init__(self, journal_path: Path):
        self.path = journal_path
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Create with header if doesn't exist
        if not self.path.exists():
            self._write_header()

    def _write_header(self):
        with self.path.open('w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=JOURNAL_FIELDS)
            writer.writeheader()

    def log(
            self,
            operation: str,
            source_path: Path,
            dest_path: Optional[Path] = None,
            status: str = 'OK',
            details: str = '',
            depth: int = 0,
    ):
        """Log a single operation."""
        with self.path.open('a', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=JOURNAL_FIELDS)
            writer.writerow({
                'Timestamp': datetime.now().isoformat(),
                'Operation': operation,
                'SourcePath': str(source_path),
                'DestPath': str(dest_path) if dest_path else '',
                'Status': status,
                'Details': details,
                'Depth': str(depth),
            })

    def __call__(self, event) -> None:
        if isinstance(event, FolderCreated):
            self.log('Mkdir', event.path, depth=event.depth)
        elif isinstance(event, FolderCreateFailed):
            self.log('Mkdir', event.path, None, 'Error', event.reason, event.depth)
        elif isinstance(event, FileMoved):
            self.log('Move', event.src, event.dst, depth=event.depth)
        elif isinstance(event, FileMoveFailed):
            self.log('Move', event.src, event.dst, 'Error', event.reason, event.depth)
        elif isinstance(event, EntrySkipped):
            self.log('Skip', event.path, None, 'Skipped', event.reason, event.depth)
        elif isinstance(event, SubtreeFailed):
            self.log('Error', event.path, None, 'Error', event.reason, event.depth)


def get_journal_path(root: Path) -> Path:
    return Path(root) / STATE_DIR_NAME / 'journal.log'


def get_journal(root: Path) -> Journal:
    """Get or create the journal for a sorted directory."""
    return Journal(get_journal_path(root))
