"""
Nested Tree Helpers

Get/set by path, deep merge and strict structural equality over the
plain dict/list trees SlashDB stores.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from slashdb.utils.paths import is_array, split_path, value_kind

_MISSING = object()


def get_in(tree: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """Return the value at a dot/slash path, or default if any segment is missing."""
    current: Any = tree
    for segment in split_path(path):
        if not isinstance(current, Mapping):
            return default
        current = current.get(segment, _MISSING)
        if current is _MISSING:
            return default
    return current


def set_in(tree: dict[str, Any], path: str, value: Any) -> dict[str, Any]:
    """
    Set a value at a dot/slash path, creating intermediate mappings.

    Intermediate nodes that are not mappings are replaced.

    Returns:
        The tree passed in
    """
    segments = split_path(path)
    current = tree
    for segment in segments[:-1]:
        node = current.get(segment)
        if not isinstance(node, dict):
            node = {}
            current[segment] = node
        current = node
    current[segments[-1]] = value
    return tree


def merge(target: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """
    Merge source into target in place.

    Mappings merge key by key at every depth; any other value (arrays
    included) replaces what target held.
    """
    for key, value in source.items():
        if isinstance(value, Mapping):
            existing = target.get(key)
            if not isinstance(existing, dict):
                existing = {}
                target[key] = existing
            merge(existing, value)
        elif is_array(value):
            target[key] = list(value)
        else:
            target[key] = value
    return target


def deep_merge(target: dict[str, Any], *sources: Mapping[str, Any]) -> dict[str, Any]:
    """Merge each source into target in order; later sources win."""
    for source in sources:
        merge(target, source)
    return target


def deep_equal(left: Any, right: Any) -> bool:
    """
    Structural equality with strict kinds.

    Arrays compare element-wise in order, mappings by key set and values.
    Unlike ==, True never equals 1.
    """
    if value_kind(left) != value_kind(right):
        return False
    if is_array(left):
        return len(left) == len(right) and all(
            deep_equal(a, b) for a, b in zip(left, right)
        )
    if isinstance(left, Mapping):
        if not isinstance(right, Mapping) or left.keys() != right.keys():
            return False
        return all(deep_equal(left[k], right[k]) for k in left)
    return bool(left == right)
