"""
Path Namespace Utilities

Dot and slash notation are interchangeable everywhere in SlashDB:
"users.alice", "users/alice", "./users/alice" and "/users.alice" all
address the same node. Internally paths are kept in slash form.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple

_LEADING_PREFIX = re.compile(r"^\.?/")


class ParsedPath(NamedTuple):
    """Result of parse_path()."""

    segments: list[str]
    path: str
    namespace: str
    collection: str | None


def normalize_path(path: str) -> str:
    """
    Normalize a path to canonical slash form.

    Backslashes become slashes, one leading "./" or "/" is stripped and
    every "." is turned into "/".

    Example:
        >>> normalize_path("./a.b/c")
        'a/b/c'
    """
    path = path.replace("\\", "/")
    path = _LEADING_PREFIX.sub("", path, count=1)
    return path.replace(".", "/")


def split_path(path: str) -> list[str]:
    """Normalize and split a path into its segments."""
    return normalize_path(path).split("/")


def parse_path(
    path: str,
    collection: str | Sequence[str] | bool | None = None,
) -> ParsedPath:
    """
    Parse a document path.

    Args:
        path: Dot or slash delimited path
        collection: Optional hint. A name (or list of names) strips the
            leading segment when it matches; True always strips it.

    Returns:
        ParsedPath with the remaining segments, slash path, dotted
        namespace and the stripped collection name (or None)
    """
    segments = split_path(path)
    stripped: str | None = None

    if collection is True:
        strip = True
    elif isinstance(collection, str):
        strip = segments[0] == collection
    elif collection:
        strip = segments[0] in collection
    else:
        strip = False

    if strip and segments:
        stripped = segments.pop(0)

    return ParsedPath(
        segments=segments,
        path="/".join(segments),
        namespace=".".join(segments),
        collection=stripped,
    )


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def value_kind(value: Any) -> str:
    """Primitive kind of a JSON-like value: boolean, number, string, array, object."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_array(value):
        return "array"
    if value is None:
        return "null"
    return "object"


def matches_type(value: Any, compare: Any) -> bool:
    """
    Check that a stored value can be compared against a query value.

    Mappings (and None) are never comparable. Arrays only compare with
    arrays; everything else must share the same primitive kind.
    """
    if value is None or isinstance(value, Mapping):
        return False
    if is_array(value):
        return is_array(compare)
    return value_kind(value) == value_kind(compare)
