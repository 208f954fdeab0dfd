"""
Database Registry

Name -> RegistryEntry map owned by one DirectoryLoader, plus the Db
handles it has handed out so they can be closed together.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from slashdb.errors import DuplicateNameError
from slashdb.types import RegistryEntry

if TYPE_CHECKING:
    from slashdb.db.database import Db

logger = logging.getLogger(__name__)


class DatabaseRegistry:
    """Registry of loaded databases and open connections."""

    def __init__(self) -> None:
        self._entries: dict[str, RegistryEntry] = {}
        self._connections: list["Db"] = []

    def register(self, entry: RegistryEntry) -> None:
        """
        Add an entry.

        Raises:
            DuplicateNameError: If an entry with the same name exists; the
                existing entry is kept
        """
        if entry.name in self._entries:
            raise DuplicateNameError(entry.name)
        self._entries[entry.name] = entry
        logger.debug(f"Registered database {entry.name!r} ({entry.filename})")

    def create(self, name: str, filename: str) -> RegistryEntry:
        """Register an empty database."""
        entry = RegistryEntry(name=name, tree={}, filename=filename)
        self.register(entry)
        return entry

    def get(self, name: str) -> RegistryEntry | None:
        return self._entries.get(name)

    def names(self) -> list[str]:
        return list(self._entries)

    # -------------------------------------------------------------------------
    # Connections
    # -------------------------------------------------------------------------

    def track(self, db: "Db") -> None:
        """Remember a connection so close_all() can release it."""
        self._connections.append(db)

    @property
    def connections(self) -> tuple["Db", ...]:
        return tuple(self._connections)

    def close_all(self) -> None:
        """Close every tracked connection and forget it."""
        for db in self._connections:
            db.close()
        logger.debug(f"Closed {len(self._connections)} connections")
        self._connections.clear()

    # -------------------------------------------------------------------------
    # Mapping protocol
    # -------------------------------------------------------------------------

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __getitem__(self, name: str) -> RegistryEntry:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DatabaseRegistry(names={self.names()!r})"
