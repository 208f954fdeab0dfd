"""
Db - Namespace Engine

Holds one database tree plus the registry of collection paths, and
enforces the collection/document alternation:

    users/alice/posts/first
    ^coll ^doc  ^coll ^doc

Segment kinds are derived from depth alone. A collection-kind segment
whose parent is a registered collection is invalid: collections must be
separated by a document level.

Example:
    >>> db = Db({"users": {"alice": {"age": 31}}})
    >>> db.doc("users.alice").get()
    {'age': 31}
    >>> db.collection("users").where("age", ">", 30).get()
    [{'age': 31}]
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import IO, Any

from slashdb.db.collection import Collection
from slashdb.db.doc import Doc
from slashdb.types import DbMetadata
from slashdb.utils.paths import normalize_path, parse_path, split_path
from slashdb.utils.tree import get_in

logger = logging.getLogger(__name__)


class SegmentKind(str, Enum):
    """Structural tag of a namespace segment."""

    COLLECTION = "collection"
    DOCUMENT = "document"


class Db:
    """
    An in-memory hierarchical document database.

    Attributes:
        tree: Nested dict holding all data
        metadata: Collection registry
        name: Database name (set when created by a loader)
        filename: Fragment file associated with this database
        stream: Optional writable handle released by close()
    """

    def __init__(
        self,
        tree: dict[str, Any] | None = None,
        *,
        metadata: DbMetadata | None = None,
        name: str | None = None,
        filename: str | None = None,
        stream: IO[Any] | None = None,
    ) -> None:
        self.tree: dict[str, Any] = tree if tree is not None else {}
        self.metadata = metadata or DbMetadata()
        self.name = name
        self.filename = filename
        self.stream = stream

    # -------------------------------------------------------------------------
    # Namespace
    # -------------------------------------------------------------------------

    @staticmethod
    def segment_kinds(
        path: str,
        starts_as_collection: bool = True,
    ) -> list[tuple[str, SegmentKind]]:
        """
        Tag every prefix of path with its structural kind.

        Returns:
            (prefix path, kind) pairs, outermost first
        """
        kinds: list[tuple[str, SegmentKind]] = []
        prefix = ""
        is_collection = starts_as_collection
        for segment in split_path(path):
            prefix = f"{prefix}/{segment}" if prefix else segment
            kind = SegmentKind.COLLECTION if is_collection else SegmentKind.DOCUMENT
            kinds.append((prefix, kind))
            is_collection = not is_collection
        return kinds

    def is_collection(self, path: str) -> bool:
        """Return True if path is a registered collection."""
        return normalize_path(path) in self.metadata.collections

    def register_collection(self, path: str) -> None:
        path = normalize_path(path)
        if path not in self.metadata.collections:
            self.metadata.collections.append(path)

    def _violates(self, index: int, kinds: list[tuple[str, SegmentKind]]) -> bool:
        if index == 0 or kinds[index][1] is not SegmentKind.COLLECTION:
            return False
        return self.is_collection(kinds[index - 1][0])

    def check_namespace(self, path: str, starts_as_collection: bool = True) -> bool:
        """Validate path against the alternation rule without side effects."""
        kinds = self.segment_kinds(path, starts_as_collection)
        return not any(self._violates(i, kinds) for i in range(len(kinds)))

    def is_valid_namespace(self, path: str, starts_as_collection: bool = True) -> bool:
        """
        Walk path, registering collections and materializing the node.

        Collection-kind segments are registered as they are visited; those
        registered before a violation stay registered. On success an empty
        dict is created at the full path unless something is already there.

        Returns:
            False if a collection-kind segment has a collection parent, or if
            a value that is not a mapping sits above the last segment
        """
        kinds = self.segment_kinds(path, starts_as_collection)

        for index, (prefix, kind) in enumerate(kinds):
            if self._violates(index, kinds):
                logger.debug(f"Invalid namespace {path!r}: collection {prefix!r} under a collection")
                return False
            if kind is SegmentKind.COLLECTION:
                self.register_collection(prefix)

        if not self._materialize(path):
            logger.debug(f"Invalid namespace {path!r}: blocked by a value that is not a mapping")
            return False
        return True

    def _materialize(self, path: str) -> bool:
        segments = split_path(path)
        current = self.tree
        for index, segment in enumerate(segments):
            node = current.get(segment)
            if node is None:
                node = {}
                current[segment] = node
            elif not isinstance(node, dict):
                # an existing value at the full path is a document, not a block
                return index == len(segments) - 1
            current = node
        return True

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get(self, path: str) -> dict[str, Any] | None:
        """Return the mapping at path, or None if absent or not a mapping."""
        node = get_in(self.tree, parse_path(path).namespace)
        if not isinstance(node, dict):
            return None
        return node

    def has(self, path: str) -> bool:
        """Return True if a collection or document mapping exists at path."""
        return self.get(path) is not None

    def collection(self, path: str) -> Collection:
        """Return the collection at path, registering it if needed."""
        return Collection(normalize_path(path), self)

    def doc(self, path: str) -> Doc | None:
        """
        Return the document at path.

        A single segment is rejected before validation: a document always
        needs a parent collection, so "users" alone never names one.

        Returns:
            None when path has a single segment or breaks the alternation rule
        """
        segments = split_path(path)
        if len(segments) < 2:
            return None
        if not self.is_valid_namespace(path):
            return None

        collection = Collection("/".join(segments[:-1]), self)
        return Doc(segments[-1], collection)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Release the output stream, if any."""
        if self.stream is not None:
            self.stream.close()
            self.stream = None
            logger.debug(f"Closed stream for database {self.name!r}")

    def __repr__(self) -> str:
        return f"Db(name={self.name!r}, collections={len(self.metadata.collections)})"
