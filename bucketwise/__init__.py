"""Sort the files of a directory into balanced first-character buckets."""

__version__ = "0.1.0"
