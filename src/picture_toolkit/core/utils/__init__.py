"""
Utils Package

Locked JSON file access shared by definition loading and saving.
"""

from .file_locking import locked_file, locked_read_json, locked_write_json

__all__ = [
    "locked_file",
    "locked_read_json",
    "locked_write_json",
]
