"""
Utility Functions

Path normalization and nested-tree helpers shared by the namespace
engine and the directory loader.

Modules:
    paths: Path normalization, parsing and query type gating
    tree: Get/set by path, deep merge, strict deep equality
"""

from slashdb.utils.paths import (
    ParsedPath,
    is_array,
    matches_type,
    normalize_path,
    parse_path,
    split_path,
    value_kind,
)
from slashdb.utils.tree import deep_equal, deep_merge, get_in, merge, set_in

__all__ = [
    "ParsedPath",
    "normalize_path",
    "parse_path",
    "split_path",
    "matches_type",
    "is_array",
    "value_kind",
    "get_in",
    "set_in",
    "merge",
    "deep_merge",
    "deep_equal",
]
