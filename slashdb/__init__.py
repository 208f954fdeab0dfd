"""
SlashDB - Embedded Hierarchical Document Store

Nested data organized into alternating collection/document levels,
addressed by dot or slash paths, queried with simple field predicates and
optionally loaded from directories of time-ordered fragment files.

Example:
    >>> from slashdb import DirectoryLoader, SlashDBConfig
    >>> loader = DirectoryLoader(SlashDBConfig(directory="./data"))
    >>> await loader.load()
    >>> db = loader.connect("alpha")
    >>> db.collection("users").where("age", ">=", 18).get()

Main Classes:
    Db: In-memory namespace engine
    DirectoryLoader: Builds databases from fragment directories
    SlashDBConfig: Configuration management
"""

__version__ = "0.1.0"


# Public API - lazy imports keep `import slashdb` cheap
def __getattr__(name: str):
    """Lazy import public API components."""

    if name in ("Db", "Collection", "Doc", "QueryChain", "is_match"):
        from slashdb import db
        return getattr(db, name)

    if name in ("DirectoryLoader", "DatabaseRegistry"):
        from slashdb import loader
        return getattr(loader, name)

    if name == "SlashDBConfig":
        from slashdb.config.settings import SlashDBConfig
        return SlashDBConfig

    if name in (
        "SlashDBError",
        "ConfigurationError",
        "ParseError",
        "FragmentReadError",
        "DuplicateNameError",
    ):
        from slashdb import errors
        return getattr(errors, name)

    if name in ("normalize_path", "parse_path", "matches_type"):
        from slashdb import utils
        return getattr(utils, name)

    raise AttributeError(f"module 'slashdb' has no attribute {name!r}")


__all__ = [
    # Main classes
    "Db",
    "Collection",
    "Doc",
    "QueryChain",
    "DirectoryLoader",
    "DatabaseRegistry",
    "SlashDBConfig",

    # Functions
    "is_match",
    "normalize_path",
    "parse_path",
    "matches_type",

    # Errors
    "SlashDBError",
    "ConfigurationError",
    "ParseError",
    "FragmentReadError",
    "DuplicateNameError",

    # Version
    "__version__",
]
