"""
Directory Loader

Builds databases from directories of fragment files.

Directory layout:
    root/
    ├── alpha/                  # database "alpha"
    │   ├── a1b2c3.sla
    │   └── nested/d4e5f6.sla
    └── beta/
        └── 9f8e7d.sla

Fragment format (one row per line, blank lines ignored):
    users.alice: {"name": "Alice", "age": 31}
    users/bob/tags: ["admin"]

Pipeline per database directory:
    1. Discovery: every *.{extension} file below the directory
    2. Load: stat + read + parse each file (barrier: all complete)
    3. Order: stable sort by file creation time, oldest first
    4. Merge: deep-merge every fragment; newer keys win at every depth

Directories are processed one after another in sorted order so that
duplicate-name detection is deterministic.

Example:
    >>> async with DirectoryLoader(SlashDBConfig(directory="./data")) as loader:
    ...     await loader.load()
    ...     db = loader.connect("alpha")
"""

from __future__ import annotations

import asyncio
import copy
import json
import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any
from uuid import uuid4

from slashdb.config import SlashDBConfig
from slashdb.db.database import Db
from slashdb.errors import FragmentReadError, ParseError
from slashdb.loader.registry import DatabaseRegistry
from slashdb.types import DatabaseFragment, RegistryEntry
from slashdb.utils.tree import deep_merge, set_in

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")


def file_creation_time(path: Path) -> float:
    """Return the file's birth time where the platform records it, else its ctime."""
    stats = path.stat()
    return float(getattr(stats, "st_birthtime", stats.st_ctime))


def _is_empty(value: Any) -> bool:
    if value is None or value is False or value == "":
        return True
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0


class DirectoryLoader:
    """
    Loads database directories and hands out Db connections.

    Lifecycle:
        loader = DirectoryLoader(config)
        await loader.load()
        db = loader.connect("alpha")
        # ... operations ...
        loader.close()

    Or using context manager:
        async with DirectoryLoader(config) as loader:
            ...
    """

    def __init__(
        self,
        config: SlashDBConfig | None = None,
        registry: DatabaseRegistry | None = None,
    ) -> None:
        self.config = config or SlashDBConfig()
        self.registry = registry if registry is not None else DatabaseRegistry()

    async def __aenter__(self) -> "DirectoryLoader":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    @property
    def root(self) -> Path:
        return self.config.root

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    @staticmethod
    def parse_row(row: str) -> tuple[str, Any]:
        """
        Parse one fragment row into (namespace, value).

        The row is split at its first colon; the right-hand side must be
        JSON that is not null, false, 0 or "".

        Raises:
            ParseError: If the row has no colon or its value is unusable
        """
        row = row.strip()
        namespace, sep, raw = row.partition(":")
        namespace = namespace.strip()
        if not sep or not namespace:
            raise ParseError(f"Failed to parse row:\n{row}", row=row)

        try:
            value = json.loads(raw.strip())
        except json.JSONDecodeError as exc:
            raise ParseError(f"Failed to parse row:\n{row}", row=row) from exc

        if _is_empty(value):
            raise ParseError(f"Failed to parse row:\n{row}", row=row)

        return namespace, value

    @classmethod
    def parse_file(cls, content: str | bytes, source: str | Path | None = None) -> dict[str, Any]:
        """
        Parse a fragment file into one nested tree.

        Later rows override earlier rows at the same path.

        Args:
            content: File content (bytes are decoded as UTF-8)
            source: Fragment path, used in error messages

        Raises:
            ParseError: Naming the source and line of the first bad row
        """
        if isinstance(content, bytes):
            content = content.decode("utf-8")

        tree: dict[str, Any] = {}
        for line_number, line in enumerate(_LINE_BREAK.split(content), start=1):
            if not line.strip():
                continue
            try:
                namespace, value = cls.parse_row(line)
            except ParseError as exc:
                raise ParseError(
                    f"Failed to parse row:\n{line.strip()}",
                    row=exc.row,
                    source=source,
                    line_number=line_number,
                ) from exc
            set_in(tree, namespace, value)
        return tree

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def load_files(
        self,
        root: str | Path,
        file_paths: Iterable[str | Path],
    ) -> list[DatabaseFragment]:
        """
        Stat, read and parse fragment files.

        All files finish loading before this returns. The result keeps the
        input order; it is not sorted.

        Raises:
            FragmentReadError: If a file cannot be stat'ed or read
            ParseError: If a file contains a bad row
        """

        async def _load(path: Path) -> DatabaseFragment:
            try:
                created_at = await asyncio.to_thread(file_creation_time, path)
                content = await asyncio.to_thread(path.read_text, encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise FragmentReadError(path) from exc

            return DatabaseFragment(
                path=str(path),
                created_at=created_at,
                tree=self.parse_file(content, source=path),
            )

        paths = [Path(p) for p in file_paths]
        # every load settles before the first failure is raised
        fragments = await asyncio.gather(*(_load(p) for p in paths), return_exceptions=True)
        for fragment in fragments:
            if isinstance(fragment, BaseException):
                raise fragment
        logger.debug(f"Loaded {len(fragments)} fragments under {root}")
        return list(fragments)

    def _discover_files(self, directory: Path) -> list[Path]:
        pattern = f"*.{self.config.extension}"
        return sorted(p for p in directory.rglob(pattern) if p.is_file())

    def _discover_databases(self, root: Path) -> list[Path]:
        return sorted((p for p in root.iterdir() if p.is_dir()), key=lambda p: p.name)

    async def load_directory(self, root: str | Path, directory: str | Path) -> RegistryEntry | None:
        """
        Load one database directory.

        Returns:
            RegistryEntry named after the directory, with the merged tree and
            the newest fragment as filename; None if there are no fragments
        """
        directory = Path(directory)
        files = await asyncio.to_thread(self._discover_files, directory)
        if not files:
            logger.debug(f"No *.{self.config.extension} fragments in {directory}")
            return None

        fragments = await self.load_files(root, files)
        fragments.sort(key=lambda f: f.created_at)

        tree = deep_merge({}, *(f.tree for f in fragments))
        logger.info(f"Merged {len(fragments)} fragments into database {directory.name!r}")

        return RegistryEntry(name=directory.name, tree=tree, filename=fragments[-1].path)

    async def load(self, directories: Iterable[str | Path] | None = None) -> DatabaseRegistry:
        """
        Load databases into the registry.

        Args:
            directories: Database directories to load. Relative paths resolve
                against the configured root. Defaults to every top-level
                directory of the root.

        Returns:
            The loader's registry

        Raises:
            DuplicateNameError: If two directories share a base name
            FragmentReadError: If any fragment cannot be read
            ParseError: If any fragment contains a bad row

        A failed load leaves the registry partially populated.
        """
        root = self.root
        candidates = [Path(d) for d in directories or ()]
        if not candidates:
            candidates = await asyncio.to_thread(self._discover_databases, root)
        else:
            candidates = [d if d.is_absolute() else root / d for d in candidates]

        for directory in candidates:
            entry = await self.load_directory(root, directory)
            if entry is None:
                continue
            self.registry.register(entry)

        return self.registry

    # -------------------------------------------------------------------------
    # Connections
    # -------------------------------------------------------------------------

    def _new_fragment_name(self, name: str) -> str:
        fragment_id = uuid4().hex[: self.config.fragment_id_length]
        return str(self.root / name / f"{fragment_id}.{self.config.extension}")

    def connect(self, name: str) -> Db:
        """
        Connect to a database, creating an empty one if it was never loaded.

        The returned Db owns a copy of the registered tree.
        """
        entry = self.registry.get(name)
        if entry is None:
            entry = self.registry.create(name, self._new_fragment_name(name))
            logger.info(f"Created empty database {name!r}")

        db = Db(copy.deepcopy(entry.tree), name=entry.name, filename=entry.filename)
        self.registry.track(db)
        return db

    def close(self) -> None:
        """Close every database connected through this loader."""
        self.registry.close_all()
