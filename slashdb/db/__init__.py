"""
Database Engine

Namespace engine plus the addressing and query objects built on it.

Modules:
    database: Db, the root namespace engine
    collection: Collection views
    doc: Doc views
    query: Predicate evaluation and query chains
"""

from slashdb.db.collection import Collection
from slashdb.db.database import Db, SegmentKind
from slashdb.db.doc import Doc
from slashdb.db.query import QueryChain, is_match

__all__ = [
    "Db",
    "SegmentKind",
    "Collection",
    "Doc",
    "QueryChain",
    "is_match",
]
