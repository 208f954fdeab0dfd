"""
Collection - addressable view over a sub-tree of a Db.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from slashdb.db.doc import Doc
from slashdb.db.query import QueryChain
from slashdb.types import Operator
from slashdb.utils.paths import split_path
from slashdb.utils.tree import get_in

if TYPE_CHECKING:
    from slashdb.db.database import Db


class Collection:
    """
    A collection of documents.

    A collection has no storage of its own: its content is whatever lives
    in the database tree at its path. Creating a Collection registers the
    path with the database.
    """

    def __init__(self, path: str, db: "Db") -> None:
        self.path = path
        self.db = db
        db.register_collection(path)

    @property
    def namespace(self) -> str:
        """Dotted form of the path."""
        return self.path.replace("/", ".")

    def snapshot(self) -> dict[str, Any]:
        """
        Return the live sub-tree at this path, or an empty dict.

        The returned dict is the database's own node, not a copy.
        """
        node = get_in(self.db.tree, self.path) if self.path else self.db.tree
        return node if isinstance(node, dict) else {}

    def doc(self, key: str) -> Doc | None:
        """Return the document at key, or None if key has more than one segment."""
        segments = split_path(key)
        if len(segments) > 1 or not segments[0]:
            return None
        return Doc(segments[0], self)

    def where(self, key: str, operator: Operator | str, value: Any) -> QueryChain:
        """Start a query chain with one predicate."""
        return QueryChain(self, key, operator, value)

    def __repr__(self) -> str:
        return f"Collection({self.path!r})"
