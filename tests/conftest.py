"""
Shared fixtures for bucketwise tests.
"""

from pathlib import Path
from typing import Callable, Iterable, List

import pytest

from bucketwise.schemas import Entry


@pytest.fixture
def make_files(tmp_path) -> Callable[..., List[Path]]:
    """Create empty files with the given names inside a directory (tmp_path by default)."""
    def _make(names: Iterable[str], directory: Path = None) -> List[Path]:
        directory = directory or tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        paths = []
        for name in names:
            path = directory / name
            path.write_text(name, encoding="utf-8")
            paths.append(path)
        return paths
    return _make


def entries_for(names: Iterable[str], root: Path = Path("/data")) -> List[Entry]:
    """Entries for files that do not need to exist on disk."""
    return [Entry(path=root / name, name=name) for name in names]


class Recorder:
    """Report sink that keeps every event."""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def of_type(self, cls):
        return [e for e in self.events if isinstance(e, cls)]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
