"""
Doc - addressable view over a single document of a Collection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from slashdb.utils.paths import split_path

if TYPE_CHECKING:
    from slashdb.db.collection import Collection


class Doc:
    """A document, addressed as {collection path}/{key}."""

    def __init__(self, key: str, parent: "Collection") -> None:
        self.key = key
        self.parent = parent
        self.path = f"{parent.path}/{key}" if parent.path else key

    @property
    def namespace(self) -> str:
        """Dotted form of the path."""
        return self.path.replace("/", ".")

    def get(self) -> Any:
        """Return the document value, or None if it does not exist."""
        return self.parent.snapshot().get(self.key)

    def exists(self) -> bool:
        """Return True if the parent collection holds this key."""
        return self.key in self.parent.snapshot()

    def collection(self, key: str) -> "Collection | None":
        """Return a sub-collection of this document, or None for a multi-segment key."""
        from slashdb.db.collection import Collection

        segments = split_path(key)
        if len(segments) > 1 or not segments[0]:
            return None
        return Collection(f"{self.path}/{segments[0]}", self.parent.db)

    def __repr__(self) -> str:
        return f"Doc({self.path!r})"
