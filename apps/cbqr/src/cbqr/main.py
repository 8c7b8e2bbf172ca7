"""
cbqr command-line front-end.

Each command runs in one asyncio event loop with one HistoryWriter (and so one
SerialQueue) over the SQLite store configured in HistorySettings.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cbqr_core.models import PersistOutcome
from cbqr_services import (
    ClipboardWatcher,
    HistoryWriter,
    PanelSession,
    SqliteStore,
    SystemClipboard,
)

from .config import app_settings, history_settings, watcher_settings
from .logger import logger, setup_logging

console = Console(
    width=120,
    color_system="auto",
)

app = typer.Typer(name="cbqr", help="Clipboard history with initial-state reconciliation.")

STATUS_STYLES = {"success": "bold green", "warning": "bold yellow", "error": "bold red"}


def show_status(message: str, kind: str = "") -> None:
    style = STATUS_STYLES.get(kind, "dim")
    console.print(f"[{style}]{message}[/{style}]")


def show_history(entries: list[str], current: Optional[str] = None) -> None:
    table = Table(title="History (newest last)")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Text")
    for index, entry in enumerate(entries):
        marker = " [bold green]*[/bold green]" if entry == current else ""
        table.add_row(str(index), f"{entry}{marker}")
    console.print(table)


def report(outcome: Optional[PersistOutcome]) -> None:
    if outcome is None:
        show_status("Nothing to save: text is empty")
        return
    if outcome.status_message:
        show_status(outcome.status_message, "error" if outcome.error else "warning")
    if outcome.error:
        raise typer.Exit(code=1)


@asynccontextmanager
async def open_writer() -> AsyncIterator[HistoryWriter]:
    settings = history_settings()
    store = SqliteStore(settings.store_path, quota_bytes=settings.quota_bytes)
    writer = HistoryWriter(store, limit=settings.limit)
    try:
        yield writer
    finally:
        await writer.queue.drain()
        store.close()


@asynccontextmanager
async def open_panel() -> AsyncIterator[PanelSession]:
    async with open_writer() as writer:
        yield PanelSession(writer, SystemClipboard(), on_status=show_status)


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    setup_logging(app_settings())


@app.command(name="open", help="Reconcile with the clipboard and show the current text.")
def open_command():
    async def run():
        async with open_panel() as panel:
            state = await panel.open()
            console.print(Panel(panel.text or "[dim](empty)[/dim]", title="Current text"))
            show_history(panel.entries, panel.text)
            return state

    state = asyncio.run(run())
    if not state.outcome.ok:
        raise typer.Exit(code=1)


@app.command(name="add", help="Append text to the history.")
def add_command(text: str = typer.Argument(..., help="Text to add.")):
    async def run():
        async with open_writer() as writer:
            return await writer.add(text)

    report(asyncio.run(run()))


@app.command(name="edit", help="Replace the panel text without touching the history.")
def edit_command(text: str = typer.Argument(..., help="New panel text.")):
    async def run():
        async with open_panel() as panel:
            return await panel.edit(text)

    report(asyncio.run(run()))


@app.command(name="paste", help="Paste the clipboard into the panel and the history.")
def paste_command():
    async def run():
        async with open_panel() as panel:
            content = await panel.clipboard.read_text()
            return await panel.paste(content)

    report(asyncio.run(run()))


@app.command(name="select", help="Make a history entry the panel text.")
def select_command(
    index: int = typer.Argument(..., help="History index (negative counts from newest)."),
):
    async def run():
        async with open_panel() as panel:
            await panel.refresh()
            if not -len(panel.entries) <= index < len(panel.entries):
                return None, False
            return await panel.select(index), True

    outcome, found = asyncio.run(run())
    if not found:
        show_status(f"No history entry at index {index}", "error")
        raise typer.Exit(code=1)
    report(outcome)


@app.command(name="history", help="List the history.")
def history_command():
    async def run():
        async with open_writer() as writer:
            return await writer.read()

    snapshot = asyncio.run(run())
    show_history(snapshot.history, snapshot.last_user_text)


@app.command(name="watch", help="Poll the clipboard and record new content until interrupted.")
def watch_command(
    interval: Optional[float] = typer.Option(
        None, "--interval", "-i", help="Poll interval in seconds."
    ),
):
    poll_interval = interval if interval is not None else watcher_settings().poll_interval

    async def run():
        async with open_writer() as writer:
            snapshot = await writer.read()
            watcher = ClipboardWatcher(
                SystemClipboard(),
                writer,
                poll_interval=poll_interval,
                last_seen=snapshot.last_clipboard,
            )
            await watcher.run(asyncio.Event())

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Clipboard watcher interrupted.")


def entry():
    """Entry point for the cbqr console script."""
    try:
        app()
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise e


if __name__ == "__main__":
    entry()
