"""
SlashDBConfig - Configuration Management

Sensible defaults with full override capability.

Example:
    >>> # Use defaults (reads from environment)
    >>> loader = DirectoryLoader()

    >>> # Explicit configuration
    >>> config = SlashDBConfig(directory="./databases", extension="frag")
    >>> loader = DirectoryLoader(config)

    >>> # From config file
    >>> config = SlashDBConfig.from_file("./slashdb.toml")

Environment Variables:
    SLASHDB_DIRECTORY - Root directory holding one sub-directory per database
    SLASHDB_EXTENSION - Fragment file extension
    SLASHDB_FRAGMENT_ID_LENGTH - Length of generated fragment file names
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any


class SlashDBConfig:
    """Configuration for SlashDB."""

    _OPTIONS = ("directory", "extension", "fragment_id_length")

    # === Loader Configuration ===

    directory: str = "./data"
    """Root directory; each sub-directory is one database"""

    extension: str = "sla"
    """Fragment file extension, without the leading dot"""

    fragment_id_length: int = 12
    """Hex characters in generated fragment file names"""

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize configuration.

        Args:
            **kwargs: Override any configuration option

        Raises:
            ValueError: If an option name is unknown
        """
        self._load_from_env()

        for key, value in kwargs.items():
            if key in self._OPTIONS:
                setattr(self, key, value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")

        self._normalize()

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        if directory := os.getenv("SLASHDB_DIRECTORY"):
            self.directory = directory
        if extension := os.getenv("SLASHDB_EXTENSION"):
            self.extension = extension
        if length := os.getenv("SLASHDB_FRAGMENT_ID_LENGTH"):
            self.fragment_id_length = int(length)

    def _normalize(self) -> None:
        self.directory = str(self.directory)
        if len(self.directory) > 1:
            self.directory = self.directory.rstrip("/")
        self.extension = self.extension.lstrip(".")

    @property
    def root(self) -> Path:
        """Root directory as a Path."""
        return Path(self.directory)

    @classmethod
    def from_file(cls, path: str | Path) -> "SlashDBConfig":
        """
        Load configuration from TOML file.

        Options may sit at the top level or under a [loader] section.

        Example TOML:
            [loader]
            directory = "./databases"
            extension = "sla"

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        flat_config: dict[str, Any] = {}
        for key, value in data.items():
            if not isinstance(value, dict):
                flat_config[key] = value
        flat_config.update(data.get("loader", {}))

        return cls(**flat_config)

    @classmethod
    def from_env(cls) -> "SlashDBConfig":
        """Load configuration from environment variables only."""
        return cls()

    def with_overrides(self, **kwargs: Any) -> "SlashDBConfig":
        """Return new config with specified overrides."""
        new_config = SlashDBConfig.__new__(SlashDBConfig)
        for key in self._OPTIONS:
            setattr(new_config, key, getattr(self, key))
        for key, value in kwargs.items():
            if key not in self._OPTIONS:
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(new_config, key, value)
        new_config._normalize()
        return new_config
