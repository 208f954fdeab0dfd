"""
Command-Line Interface

CLI commands for inspecting SlashDB fragment directories.

Commands:
    slashdb databases - List databases found under a root directory
    slashdb get       - Print the node or document at a path
    slashdb where     - Run a single-predicate query against a collection

Usage:
    # List databases
    slashdb databases --root ./data

    # Read a document
    slashdb get alpha users.alice --root ./data

    # Query
    slashdb where alpha users age ">=" 18 --root ./data

The root defaults to SLASHDB_DIRECTORY (a .env file is honoured).
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from slashdb.config import SlashDBConfig
from slashdb.db.database import Db
from slashdb.errors import ConfigurationError, SlashDBError
from slashdb.loader import DirectoryLoader
from slashdb.utils.paths import normalize_path

__all__ = ["main", "app"]

app = typer.Typer(
    name="slashdb",
    help="Embedded hierarchical document store",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def _setup(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Log loader activity",
    ),
) -> None:
    load_dotenv()
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _config(root: Optional[Path], extension: Optional[str]) -> SlashDBConfig:
    overrides: dict[str, Any] = {}
    if root is not None:
        overrides["directory"] = str(root)
    if extension is not None:
        overrides["extension"] = extension
    return SlashDBConfig(**overrides)


def _open(name: str, config: SlashDBConfig) -> Db:
    async def _run() -> Db:
        loader = DirectoryLoader(config)
        await loader.load()
        if name not in loader.registry:
            console.print(f"[red]Database '{name}' not found in {config.directory}[/]")
            raise typer.Exit(code=1)
        return loader.connect(name)

    try:
        return asyncio.run(_run())
    except SlashDBError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(code=1)


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@app.command()
def databases(
    root: Optional[Path] = typer.Option(
        None,
        "--root", "-r",
        help="Root directory holding database directories",
    ),
    extension: Optional[str] = typer.Option(
        None,
        "--ext", "-e",
        help="Fragment file extension",
    ),
) -> None:
    """List databases found under the root directory."""
    config = _config(root, extension)

    async def _run() -> None:
        loader = DirectoryLoader(config)
        registry = await loader.load()

        if not len(registry):
            console.print(f"[yellow]No databases found in {config.directory}[/]")
            return

        table = Table(title=f"Databases: {config.directory}")
        table.add_column("Name", style="cyan")
        table.add_column("Latest fragment", style="dim")
        table.add_column("Collections", justify="right", style="green")

        for name in registry:
            entry = registry[name]
            table.add_row(name, entry.filename, str(len(entry.tree)))

        console.print(table)

    try:
        asyncio.run(_run())
    except SlashDBError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(code=1)


@app.command()
def get(
    name: str = typer.Argument(..., help="Database name"),
    path: str = typer.Argument(..., help="Dot or slash path to read"),
    root: Optional[Path] = typer.Option(
        None,
        "--root", "-r",
        help="Root directory holding database directories",
    ),
    extension: Optional[str] = typer.Option(
        None,
        "--ext", "-e",
        help="Fragment file extension",
    ),
) -> None:
    """Print the collection, document or value at a path as JSON."""
    db = _open(name, _config(root, extension))

    value: Any = db.get(path)
    if value is None:
        parent, _, key = normalize_path(path).rpartition("/")
        doc = db.collection(parent).doc(key) if parent else None
        value = doc.get() if doc is not None else None

    if value is None:
        console.print(f"[yellow]Nothing at '{path}'[/]")
        raise typer.Exit(code=1)

    console.print_json(json.dumps(value))


@app.command()
def where(
    name: str = typer.Argument(..., help="Database name"),
    collection: str = typer.Argument(..., help="Collection path"),
    key: str = typer.Argument(..., help="Top-level document field"),
    operator: str = typer.Argument(..., help="==, !=, >, <, >=, <=, in, not"),
    value: str = typer.Argument(..., help="Compare value (JSON, or a plain string)"),
    root: Optional[Path] = typer.Option(
        None,
        "--root", "-r",
        help="Root directory holding database directories",
    ),
    extension: Optional[str] = typer.Option(
        None,
        "--ext", "-e",
        help="Fragment file extension",
    ),
) -> None:
    """Query a collection with a single predicate."""
    db = _open(name, _config(root, extension))

    try:
        results = db.collection(collection).where(key, operator, _parse_value(value)).get()
    except ConfigurationError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(code=2)

    console.print_json(json.dumps(results))
    console.print(f"\n[dim]{len(results)} matching documents[/]")


def main() -> None:
    """Entry point for the CLI."""
    app()
