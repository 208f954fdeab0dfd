"""
Record Types

Storage Models:
    - DbMetadata: Collection registry held by every Db
    - RegistryEntry: A loaded (or lazily created) database

Loader Models (used only during a load):
    - DatabaseFragment: One parsed fragment file
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

Operator = Literal["==", "!=", ">", "<", ">=", "<=", "in", "not"]
"""Query operators understood by Collection.where()"""

OPERATORS: frozenset[str] = frozenset({"==", "!=", ">", "<", ">=", "<=", "in", "not"})


class DbMetadata(BaseModel):
    """
    Namespace metadata for a database.

    Attributes:
        collections: Registered collection paths in canonical slash form,
            in registration order
    """

    collections: list[str] = Field(default_factory=list)


class DatabaseFragment(BaseModel):
    """
    One fragment file parsed during a directory load.

    Attributes:
        path: Fragment file path
        created_at: File creation timestamp (seconds since epoch)
        tree: Parsed rows set into one nested mapping
    """

    path: str
    created_at: float
    tree: dict[str, Any] = Field(default_factory=dict)


class RegistryEntry(BaseModel):
    """
    A database known to a loader.

    Attributes:
        name: Database name (base name of its directory)
        tree: Merged tree of all its fragments
        filename: Most recent fragment path, or the generated name of a
            fragment for a database created at connect time
    """

    name: str
    tree: dict[str, Any] = Field(default_factory=dict)
    filename: str
