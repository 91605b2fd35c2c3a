"""CLI entry point using typer."""

from __future__ import annotations

import logging
import sys
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cmd_keeper import __version__
from cmd_keeper.config import (
    AppConfig,
    get_config,
    get_config_file,
    get_db_path,
    get_log_file,
    save_config,
)
from cmd_keeper.errors import CmdKeeperError, EntryNotFoundError
from cmd_keeper.services.clipboard import copy_to_clipboard
from cmd_keeper.storage.database import Storage
from cmd_keeper.storage.models import CommandEntry
from cmd_keeper.utils.formatting import build_entries_table

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="cmd-keeper",
    help="Save, manage, and search frequently used commands. Run without a command for the interactive UI.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def fail(message: str) -> NoReturn:
    """Print 'Error: <message>' to stderr and exit with status 1."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(1)


def _setup_logging(config: AppConfig) -> None:
    log_file = get_log_file(config)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.FileHandler(str(log_file))],
        force=True,
    )


def _get_config(ctx: typer.Context) -> AppConfig:
    if ctx.obj is None:
        ctx.obj = get_config()
    return ctx.obj


def _open_storage(ctx: typer.Context) -> Storage:
    return Storage(get_db_path(_get_config(ctx)))


def _parse_tags(tags: str | None) -> list[str]:
    if tags is None:
        return []
    return [t.strip() for t in tags.split(",") if t.strip()]


def _print_entry(entry: CommandEntry) -> None:
    console.print(f"  [dim]ID:[/dim] {entry.id}")
    console.print(f"  [dim]Command:[/dim] {escape(entry.command)}")
    console.print(f"  [dim]Description:[/dim] {escape(entry.description)}")
    if entry.tags:
        console.print(f"  [dim]Tags:[/dim] {escape(entry.tags_display())}")


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Launch the interactive UI when no command is given."""
    try:
        config = _get_config(ctx)
        _setup_logging(config)
    except (CmdKeeperError, OSError) as e:
        fail(str(e))

    if ctx.invoked_subcommand is not None:
        return

    from cmd_keeper.tui import run_tui

    try:
        run_tui(_open_storage(ctx), config)
    except CmdKeeperError as e:
        fail(str(e))


@app.command()
def add(
    ctx: typer.Context,
    command: str = typer.Option(..., "--command", "-c", help="The command to save"),
    description: str = typer.Option(..., "--description", "-d", help="What the command does"),
    tags: str = typer.Option(None, "--tags", "-t", help="Comma-separated tags"),
) -> None:
    """Add a new command with description."""
    try:
        storage = _open_storage(ctx)
        db = storage.load()
        entry_id = db.add(command, description, _parse_tags(tags))
        storage.save(db)
    except CmdKeeperError as e:
        fail(str(e))

    logger.info("Added command %d", entry_id)
    console.print("[bold green]✓ Command saved successfully![/bold green]")
    _print_entry(db.find_by_id(entry_id))  # type: ignore[arg-type]


@app.command("list")
def list_commands(
    ctx: typer.Context,
    full: bool = typer.Option(False, "--full", "-f", help="Show full text without truncation"),
) -> None:
    """List all saved commands."""
    try:
        db = _open_storage(ctx).load()
    except CmdKeeperError as e:
        fail(str(e))

    entries = db.list_all()
    if not entries:
        console.print("[yellow]No commands saved yet.[/yellow]")
        console.print("Use [cyan]cmd-keeper add[/cyan] to add your first command.")
        return

    console.print(build_entries_table(entries, full=full))
    console.print(f"\n[dim]Total:[/dim] [cyan]{len(entries)}[/cyan] command(s)")


@app.command()
def search(
    ctx: typer.Context,
    keyword: str = typer.Argument(..., help="Searched in command, description and tags"),
    full: bool = typer.Option(False, "--full", "-f", help="Show full text without truncation"),
) -> None:
    """Search commands by keyword."""
    try:
        db = _open_storage(ctx).load()
    except CmdKeeperError as e:
        fail(str(e))

    results = db.search(keyword)
    if not results:
        console.print(f"[red]✗[/red] No commands found matching '[yellow]{escape(keyword)}[/yellow]'")
        return

    console.print(f"Found [cyan]{len(results)}[/cyan] result(s) for '[yellow]{escape(keyword)}[/yellow]':\n")
    console.print(build_entries_table(results, full=full))


@app.command()
def edit(
    ctx: typer.Context,
    entry_id: int = typer.Argument(..., metavar="ID", help="ID of the command to edit"),
    command: str = typer.Option(None, "--command", "-c", help="New command text"),
    description: str = typer.Option(None, "--description", "-d", help="New description"),
    tags: str = typer.Option(None, "--tags", "-t", help="New comma-separated tags"),
) -> None:
    """Edit an existing command."""
    if command is None and description is None and tags is None:
        fail("At least one of --command, --description, or --tags must be provided")

    try:
        storage = _open_storage(ctx)
        db = storage.load()
        new_tags = _parse_tags(tags) if tags is not None else None
        if not db.update(entry_id, command, description, new_tags):
            raise EntryNotFoundError(entry_id)
        storage.save(db)
    except CmdKeeperError as e:
        fail(str(e))

    logger.info("Updated command %d", entry_id)
    console.print("[bold green]✓ Command updated successfully![/bold green]")
    _print_entry(db.find_by_id(entry_id))  # type: ignore[arg-type]


@app.command()
def delete(
    ctx: typer.Context,
    entry_id: int = typer.Argument(..., metavar="ID", help="ID of the command to delete"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Delete a command by ID."""
    try:
        storage = _open_storage(ctx)
        db = storage.load()
        entry = db.find_by_id(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
    except CmdKeeperError as e:
        fail(str(e))

    if not force:
        console.print("[yellow]Command to delete:[/yellow]")
        _print_entry(entry)
        console.print()
        if not typer.confirm("Are you sure you want to delete this?", default=False):
            console.print("[dim]Deletion cancelled.[/dim]")
            return

    try:
        db.remove_by_id(entry_id)
        storage.save(db)
    except CmdKeeperError as e:
        fail(str(e))

    logger.info("Deleted command %d", entry_id)
    console.print(f"[green]✓[/green] Command [cyan]{entry_id}[/cyan] deleted successfully.")


@app.command()
def copy(
    ctx: typer.Context,
    entry_id: int = typer.Argument(..., metavar="ID", help="ID of the command to copy"),
) -> None:
    """Copy a command to the clipboard by ID."""
    try:
        db = _open_storage(ctx).load()
        entry = db.find_by_id(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        copy_to_clipboard(entry.command, backend=_get_config(ctx).clipboard.backend)
    except CmdKeeperError as e:
        fail(str(e))

    console.print("[bold green]✓[/bold green] Command copied to clipboard!")
    console.print(f"  [dim]ID:[/dim] {entry.id}")
    console.print(f"  [dim]Command:[/dim] [cyan]{escape(entry.command)}[/cyan]")


@app.command()
def path(ctx: typer.Context) -> None:
    """Show the path to the database file."""
    try:
        db_path = get_db_path(_get_config(ctx))
    except CmdKeeperError as e:
        fail(str(e))
    console.print(f"[dim]Database path:[/dim] [cyan]{escape(str(db_path))}[/cyan]", soft_wrap=True)


@app.command()
def config(
    ctx: typer.Context,
    key: str = typer.Argument(None, help="Config key (e.g., tui.list_width)"),
    value: str = typer.Argument(None, help="New value"),
) -> None:
    """View or modify configuration."""
    cfg = _get_config(ctx)
    section_map = {
        "storage": cfg.storage,
        "tui": cfg.tui,
        "shell": cfg.shell,
        "clipboard": cfg.clipboard,
        "logging": cfg.logging,
    }

    if key is None:
        # Show all config
        table = Table(title="Configuration")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")

        for section, obj in section_map.items():
            for attr, current in vars(obj).items():
                table.add_row(f"{section}.{attr}", escape(str(current)) if current != "" else "(default)")

        console.print(table)
        console.print(f"\n[dim]Config file:[/dim] {escape(str(get_config_file()))}", soft_wrap=True)
        return

    if value is None:
        fail("Usage: cmd-keeper config <key> <value>")

    # Set config value
    parts = key.split(".")
    if len(parts) != 2:
        fail("Key format: section.key (e.g., tui.list_width)")

    section, attr = parts
    if section not in section_map:
        fail(f"Unknown section: {section}")

    obj = section_map[section]
    if not hasattr(obj, attr):
        fail(f"Unknown key: {key}")

    # Type coercion
    current = getattr(obj, attr)
    try:
        if isinstance(current, bool):
            typed_value = value.lower() in ("true", "1", "yes")
        elif isinstance(current, int):
            typed_value = int(value)
        elif isinstance(current, float):
            typed_value = float(value)
        else:
            typed_value = value
    except ValueError:
        fail(f"Invalid value type for {key}")

    setattr(obj, attr, typed_value)
    try:
        save_config(cfg)
    except OSError as e:
        fail(str(e))
    console.print(f"[green]{escape(key)} = {escape(str(typed_value))}[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"cmd-keeper v{__version__}")
    console.print(f"Python: {sys.version.split()[0]}")
    try:
        console.print(f"Config: {get_config_file()}")
    except CmdKeeperError:
        console.print("Config: [yellow]unavailable[/yellow]")


# Short aliases
app.command("a", hidden=True)(add)
app.command("ls", hidden=True)(list_commands)
app.command("s", hidden=True)(search)
app.command("e", hidden=True)(edit)
app.command("rm", hidden=True)(delete)
app.command("cp", hidden=True)(copy)


if __name__ == "__main__":
    app()
