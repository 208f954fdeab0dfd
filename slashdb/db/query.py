"""
Field Predicate Queries

Flat, top-level field predicates over the documents of one collection,
composed left to right with AND/OR.

Example:
    >>> users = db.collection("users")
    >>> adults = users.where("age", ">=", 18).and_("tags", "in", ["admin"]).get()

Comparison rules:
    - Strings and arrays order by LENGTH for >, <, >=, <= (not lexically)
    - "in"/"not" need an array compare value; an array field matches when
      it shares at least one element with it
    - "=="/"!=" use strict deep equality (True never equals 1)
    - Unknown operators never match
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from slashdb.errors import ConfigurationError
from slashdb.types import OPERATORS, Operator
from slashdb.utils.paths import is_array, matches_type, value_kind
from slashdb.utils.tree import deep_equal

if TYPE_CHECKING:
    from slashdb.db.collection import Collection

logger = logging.getLogger(__name__)

_MEMBERSHIP = ("in", "not")
_EQUALITY = ("==", "!=")


def _contains(values: Sequence[Any], current: Any) -> bool:
    if is_array(current):
        return any(deep_equal(v, c) for v in values for c in current)
    return any(deep_equal(v, current) for v in values)


def _measure(current: Any, value: Any) -> tuple[Any, Any]:
    if is_array(current) or isinstance(current, str):
        return len(current), len(value)
    return current, value


def check_operands(operator: Operator | str, value: Any) -> None:
    """Raise if value cannot be used with operator, whatever the data."""
    if operator in _MEMBERSHIP and not is_array(value):
        raise ConfigurationError(
            f'Operator "{operator}" requires compare value of Array '
            f"but got type of {value_kind(value)}"
        )


def is_match(row: Any, key: str, operator: Operator | str, value: Any) -> bool:
    """
    Check whether row[key] satisfies a predicate.

    Args:
        row: Document value (rows that are not mappings never match)
        key: Top-level field name
        operator: One of ==, !=, >, <, >=, <=, in, not
        value: Value to compare against

    Raises:
        ConfigurationError: "in"/"not" with a non-array value, or
            "=="/"!=" between an array field and a non-array value
    """
    if operator not in OPERATORS:
        return False

    check_operands(operator, value)

    current = row.get(key) if isinstance(row, Mapping) else None

    if operator in _EQUALITY and is_array(current) and not is_array(value):
        hint = "in" if operator == "==" else "not"
        raise ConfigurationError(
            "Attempted equality operator but source and compare values are "
            f'not of same type, did you mean to use "{hint}"?'
        )

    if current is None or isinstance(current, Mapping):
        return False

    if operator == "in":
        return _contains(value, current)
    if operator == "not":
        return not _contains(value, current)

    if not matches_type(current, value):
        return False

    if operator == "==":
        return deep_equal(current, value)
    if operator == "!=":
        return not deep_equal(current, value)

    left, right = _measure(current, value)
    if operator == ">":
        return bool(left > right)
    if operator == "<":
        return bool(left < right)
    if operator == ">=":
        return bool(left >= right)
    return bool(left <= right)


class QueryChain:
    """
    A chain of predicates bound to one collection.

    Every step evaluates its predicate against the documents currently in
    the collection's snapshot and folds the result into a per-document
    boolean. Documents that appear after a step was evaluated start out
    as non-matching.
    """

    def __init__(
        self,
        collection: "Collection",
        key: str,
        operator: Operator | str,
        value: Any,
    ) -> None:
        self._collection = collection
        self._results: dict[str, bool] = {}
        self._steps: list[tuple[str, str, str, Any]] = []
        self._apply("where", key, operator, value)

    @property
    def collection(self) -> "Collection":
        return self._collection

    @property
    def steps(self) -> list[tuple[str, str, str, Any]]:
        """Steps applied so far as (combinator, key, operator, value)."""
        return list(self._steps)

    def _apply(self, combinator: str, key: str, operator: Operator | str, value: Any) -> "QueryChain":
        check_operands(operator, value)
        snapshot = self._collection.snapshot()
        results: dict[str, bool] = {}

        for doc_key, row in snapshot.items():
            matched = is_match(row, key, operator, value)
            previous = self._results.get(doc_key, False)
            if combinator == "and":
                matched = previous and matched
            elif combinator == "or":
                matched = previous or matched
            results[doc_key] = matched

        self._results = results
        self._steps.append((combinator, key, operator, value))
        logger.debug(
            f"{self._collection.path}: {combinator} {key} {operator} {value!r} "
            f"-> {sum(results.values())}/{len(results)} documents"
        )
        return self

    def and_(self, key: str, operator: Operator | str, value: Any) -> "QueryChain":
        """Narrow the result: documents must also satisfy this predicate."""
        return self._apply("and", key, operator, value)

    def or_(self, key: str, operator: Operator | str, value: Any) -> "QueryChain":
        """Widen the result: documents satisfying this predicate also match."""
        return self._apply("or", key, operator, value)

    def keys(self) -> list[str]:
        """Keys of matching documents still present in the collection."""
        snapshot = self._collection.snapshot()
        return [k for k in snapshot if self._results.get(k, False)]

    def get(self) -> list[Any]:
        """Return the matching document values, in collection order."""
        snapshot = self._collection.snapshot()
        return [row for k, row in snapshot.items() if self._results.get(k, False)]

    def __len__(self) -> int:
        return len(self.keys())

    def __repr__(self) -> str:
        return f"QueryChain(collection={self._collection.path!r}, steps={len(self._steps)})"
