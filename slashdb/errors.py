"""
Error Types

Fatal errors raised by SlashDB. Addressing mistakes (bad namespaces,
multi-segment keys) are not errors: they return None or False.

Hierarchy:
    SlashDBError
    ├── ConfigurationError   - query operator misuse
    ├── ParseError           - malformed fragment row
    ├── FragmentReadError    - fragment stat/read failure
    └── DuplicateNameError   - two directories resolve to one database name
"""

from __future__ import annotations

from pathlib import Path


class SlashDBError(Exception):
    """Base class for all SlashDB errors."""


class ConfigurationError(SlashDBError, ValueError):
    """A query was built with operator/value combinations that cannot work."""


class ParseError(SlashDBError, ValueError):
    """
    A fragment row could not be parsed.

    Attributes:
        row: The offending row text
        source: Fragment file the row came from (if known)
        line_number: 1-based line number within the source (if known)
    """

    def __init__(
        self,
        message: str,
        *,
        row: str | None = None,
        source: str | Path | None = None,
        line_number: int | None = None,
    ) -> None:
        self.row = row
        self.source = str(source) if source is not None else None
        self.line_number = line_number
        if self.source is not None:
            location = self.source
            if line_number is not None:
                location = f"{location}:{line_number}"
            message = f"{location}: {message}"
        super().__init__(message)


class FragmentReadError(SlashDBError, OSError):
    """A fragment file could not be stat'ed or read."""

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f"Failed to load file: {self.path}")


class DuplicateNameError(SlashDBError):
    """Two database directories resolved to the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate database {name} could not be set.")
