"""
Data Types

Pydantic models shared across SlashDB.
"""

from slashdb.types.records import (
    OPERATORS,
    DatabaseFragment,
    DbMetadata,
    Operator,
    RegistryEntry,
)

__all__ = [
    "OPERATORS",
    "Operator",
    "DbMetadata",
    "DatabaseFragment",
    "RegistryEntry",
]
