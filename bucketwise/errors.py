"""
Error taxonomy for Bucketwise.

Only MoveFailure is recovered per item; everything else stops the bucket or
subtree it happened in.
"""

from pathlib import Path


class BucketwiseError(Exception):
    """Base class for all bucketwise errors."""


class EmptyNameError(BucketwiseError, ValueError):
    """A file name with no characters cannot be given a bucket key."""

    def __init__(self, path=None):
        self.path = path
        where = f": {path}" if path else ""
        super().__init__(f"cannot derive a bucket key from an empty name{where}")


class MoveFailure(BucketwiseError):
    """A single file could not be moved into its bucket folder."""

    def __init__(self, src: Path, dst: Path, reason: str):
        self.src = src
        self.dst = dst
        self.reason = reason
        super().__init__(f"could not move {src} -> {dst}: {reason}")


class DirectoryCreateFailure(BucketwiseError):
    """A bucket folder could not be created; none of its files are moved."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"could not create folder {path}: {reason}")


class AbortedByUser(BucketwiseError):
    """The confirmation prompt was declined. Not a failure."""


class ConfigError(BucketwiseError, ValueError):
    """The YAML config file is malformed or names unknown options."""
