"""
Configuration System

Configuration Priority (highest to lowest):
    1. Programmatic (passed to SlashDBConfig())
    2. Environment variables (SLASHDB_* prefix)
    3. Built-in defaults

A TOML file can be loaded with SlashDBConfig.from_file().
"""

from slashdb.config.settings import SlashDBConfig

__all__ = ["SlashDBConfig"]
