"""
Directory Loading

Materializes databases from directories of fragment files.

Modules:
    directory: DirectoryLoader (discover, parse, order, merge, connect)
    registry: DatabaseRegistry (name -> entry, open connections)
"""

from slashdb.loader.directory import DirectoryLoader, file_creation_time
from slashdb.loader.registry import DatabaseRegistry

__all__ = [
    "DirectoryLoader",
    "DatabaseRegistry",
    "file_creation_time",
]
