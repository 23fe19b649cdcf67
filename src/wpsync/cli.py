"""CLI entry point."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Optional, TypeVar

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wpsync.content_types import build_registry
from wpsync.core.config import get_settings
from wpsync.core.exceptions import WpSyncError
from wpsync.core.log import configure_logging
from wpsync.core.wpsync import WpSync
from wpsync.http.client import WordPressClient
from wpsync.models.result import ItemResult, SyncResult
from wpsync.store import create_store

T = TypeVar("T")

app = typer.Typer(
    name="wpsync",
    help="Synchronize local records with a WordPress REST API",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override WPSYNC_LOG_LEVEL"),
) -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e
    configure_logging(log_level or settings.log_level, settings.log_format)


def build_wpsync() -> WpSync:
    """Wire client, store and registry from settings."""
    settings = get_settings()
    return WpSync(
        WordPressClient.from_settings(settings),
        create_store(settings.database_url),
        build_registry(settings),
        settings,
    )


def _run(operation: Callable[[WpSync], Awaitable[T]]) -> T:
    async def runner() -> T:
        async with build_wpsync() as spine:
            return await operation(spine)

    try:
        return asyncio.run(runner())
    except WpSyncError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


def _print_item(result: ItemResult) -> None:
    console.print(f"{result.content_type} {result.source_id}: [bold]{result.outcome.value}[/bold]")


def _print_results(results: list[SyncResult]) -> None:
    table = Table(title="Reconciliation")
    for column in ("type", "pages", "upserted", "skipped", "deleted", "notes"):
        table.add_column(column)
    for r in results:
        notes = []
        if r.truncated:
            notes.append("truncated at page cap")
        if r.deletion_skipped:
            notes.append("deletion skipped")
        table.add_row(
            r.content_type,
            str(r.pages_fetched),
            str(r.upserted),
            str(r.skipped),
            str(r.deleted),
            ", ".join(notes),
        )
    console.print(table)


@app.command()
def version() -> None:
    """Show version."""
    from wpsync import __version__

    console.print(f"wpsync {__version__}")


@app.command()
def info() -> None:
    """Show system information."""
    import sys

    from wpsync import __version__

    settings = get_settings()
    console.print(f"[bold]wpsync[/bold] {__version__}")
    console.print(f"Python {sys.version}")
    console.print(f"WordPress {settings.wordpress_url}{settings.api_path}")
    console.print(f"Store {settings.database_url}")


@app.command()
def types() -> None:
    """List configured content types."""
    settings = get_settings()
    for content_type in build_registry(settings):
        mode = "paginated" if content_type.paginated else "flat"
        fields = ", ".join(content_type.mapper.names)
        console.print(f"{content_type.name} ({mode}): {fields}")


@app.command()
def sync(
    content_type: str = typer.Argument(..., help="Content type name"),
    source_id: Optional[str] = typer.Option(None, "--id", help="Sync a single item"),
    preview: bool = typer.Option(False, "--preview", help="Fetch the preview route"),
) -> None:
    """Sync one item, or run a reconciliation pass for a content type."""
    if source_id is not None:
        _print_item(_run(lambda spine: spine.reconciler(content_type).sync_one(source_id, preview)))
    else:
        _print_results([_run(lambda spine: spine.reconciler(content_type).sync_all())])


@app.command("sync-all")
def sync_all() -> None:
    """Run a reconciliation pass for every configured content type."""
    results = _run(lambda spine: spine.sync_all_types())
    _print_results(list(results.values()))


@app.command()
def options() -> None:
    """Refresh the site options record."""
    _print_item(_run(lambda spine: spine.reconciler("options").sync_options()))


@app.command()
def purge(content_type: str, source_id: str) -> None:
    """Delete a local record."""
    _print_item(_run(lambda spine: spine.reconciler(content_type).purge(source_id)))


@app.command()
def unpublish(content_type: str, source_id: str) -> None:
    """Mark a local record as draft."""
    _print_item(_run(lambda spine: spine.reconciler(content_type).unpublish(source_id)))


if __name__ == "__main__":
    app()
