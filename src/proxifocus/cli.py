from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from proxifocus.config import get_settings
from proxifocus.domain.models import Endpoint
from proxifocus.store.endpoint_store import EndpointStore
from proxifocus.store.kv import SQLiteKeyValueStore, StorageError


app = typer.Typer(no_args_is_help=True, add_completion=False)

console = Console()
logger = logging.getLogger("proxifocus")


def configure_logging(level: str) -> None:
    # stderr only; stdout is reserved for command output
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        handlers=[logging.StreamHandler()],
        force=True,
    )


@app.callback()
def main_options(
    ctx: typer.Context,
    db: Optional[str] = typer.Option(None, help="Settings file holding the list"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    db_path = Path(db).expanduser() if db else settings.db_path
    if db_path.exists() and db_path.is_dir():
        raise typer.BadParameter(f"DB path is a directory: {db_path}")

    ctx.obj = {"db_path": db_path, "storage_key": settings.storage_key}


def _open_store(ctx: typer.Context) -> EndpointStore:
    # --help must not create the settings file
    db_path: Path = ctx.obj["db_path"]
    try:
        storage = SQLiteKeyValueStore(db_path)
    except StorageError as exc:
        console.print(f"[bold red]error:[/bold red] {exc}")
        raise typer.Exit(code=1)

    store = EndpointStore(storage, key=ctx.obj["storage_key"])
    store.load()
    logger.debug("Loaded %d endpoints from %s", len(store.list()), db_path)
    return store


def _describe(endpoint: Endpoint) -> str:
    state = "enabled" if endpoint.enabled else "disabled"
    return f"{endpoint.url} ({state}) id={endpoint.id}"


@app.command("list")
def list_endpoints(
    ctx: typer.Context,
    format: str = typer.Option("table", help="Output format: table|json"),
    enabled_only: bool = typer.Option(False, "--enabled-only", help="Hide disabled endpoints"),
) -> None:
    fmt = format.lower().strip()
    if fmt not in ("table", "json"):
        raise typer.BadParameter("format must be one of: table, json")

    store = _open_store(ctx)
    endpoints = store.enabled() if enabled_only else store.list()

    if fmt == "json":
        typer.echo(json.dumps([e.model_dump() for e in endpoints], indent=2))
        return

    if not endpoints:
        console.print(Text("No endpoints", style="italic grey50"))
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("URL", overflow="ellipsis")
    table.add_column("STATE", no_wrap=True)
    table.add_column("ID", no_wrap=True)

    for e in endpoints:
        style = "" if e.enabled else "grey50"
        table.add_row(
            Text(e.url, style=style),
            Text("enabled" if e.enabled else "disabled", style="green" if e.enabled else "red"),
            Text(e.id, style=style),
        )

    console.print(table)


@app.command()
def add(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL to add"),
) -> None:
    store = _open_store(ctx)
    endpoint = store.add(url)
    if endpoint is None:
        console.print(Text(f"Not a valid URL, nothing added: {url!r}", style="yellow"))
        return
    console.print(Text(f"Added {_describe(endpoint)}", style="green"))


@app.command()
def toggle(
    ctx: typer.Context,
    endpoint_id: str = typer.Argument(..., metavar="ID", help="Endpoint id"),
) -> None:
    store = _open_store(ctx)
    endpoint = store.toggle(endpoint_id)
    if endpoint is None:
        console.print(Text(f"No endpoint with id {endpoint_id}", style="yellow"))
        return
    verb = "Enabled" if endpoint.enabled else "Disabled"
    console.print(Text(f"{verb} {_describe(endpoint)}"))


@app.command()
def remove(
    ctx: typer.Context,
    endpoint_id: str = typer.Argument(..., metavar="ID", help="Endpoint id"),
) -> None:
    store = _open_store(ctx)
    endpoint = store.remove(endpoint_id)
    if endpoint is None:
        console.print(Text(f"No endpoint with id {endpoint_id}", style="yellow"))
        return
    console.print(Text(f"Removed {_describe(endpoint)}"))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
