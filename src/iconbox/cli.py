"""CLI interface for iconbox."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config.logging import get_logger, setup_logging
from .config.settings import get_settings
from .exceptions import IconboxError
from .library.models import Collection, Icon
from .library.service import LibraryService
from .library.views import View

app = typer.Typer(
    name="iconbox",
    help="Organize SVG icons into collections, tag them and find them again.",
    rich_markup_mode="rich",
    no_args_is_help=True,
)
settings_app = typer.Typer(help="Show or change display settings.", no_args_is_help=True)
app.add_typer(settings_app, name="settings")

console = Console()
logger = get_logger(__name__)


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Print library errors in red and exit with status 1."""
    try:
        yield
    except IconboxError as e:
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        if e.details:
            console.print(f"[dim]{escape(e.details)}[/dim]")
        raise typer.Exit(1)


def _service(ctx: typer.Context) -> LibraryService:
    if ctx.obj is None:
        ctx.obj = {}
    svc = ctx.obj.get("service")
    if svc is None:
        with _handle_errors():
            svc = LibraryService(config=ctx.obj.get("config") or get_settings())
        ctx.obj["service"] = svc
    return svc


def _collection_rows(collections: list[Collection]) -> list[tuple[int, Collection]]:
    """Collections in tree order with their depth."""
    by_parent: dict[str | None, list[Collection]] = {}
    for c in collections:
        by_parent.setdefault(c.parent_id, []).append(c)
    rows: list[tuple[int, Collection]] = []
    stack = [(0, c) for c in reversed(by_parent.get(None, []))]
    while stack:
        depth, c = stack.pop()
        rows.append((depth, c))
        stack.extend((depth + 1, child) for child in reversed(by_parent.get(c.id, [])))
    return rows


def _print_icons(icons: list[Icon], title: str) -> None:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Tags")
    table.add_column("Fav", justify="center")
    table.add_column("Size", justify="right")
    for i in icons:
        table.add_row(
            escape(i.name),
            i.id,
            escape(", ".join(i.tags)),
            "[yellow]★[/yellow]" if i.favorite else "",
            f"{i.file_size:,} B",
        )
    console.print(table)


@app.callback()
def _configure(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Library directory (default from ICONBOX_DATA_DIR or the user data dir)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Load configuration and logging before any command."""
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)
    if data_dir is not None:
        settings = settings.model_copy(update={"data_dir": data_dir})
    setup_logging(level="DEBUG" if verbose else settings.log_level)
    logger.debug("Using data directory %s", settings.data_dir)
    ctx.obj = {"config": settings}


# ---------------------------------------------------------------------------
# Imports
# ---------------------------------------------------------------------------
@app.command("import")
def import_folder(
    ctx: typer.Context,
    folder: Path = typer.Argument(..., help="Folder of SVG files to import"),
    parent: Optional[str] = typer.Option(None, "--parent", "-p", help="Parent collection ID"),
) -> None:
    """Import a folder as a new collection.

    Examples:
        iconbox import ~/Downloads/feather
        iconbox import ./brand-icons --parent 3f2c...
    """
    svc = _service(ctx)
    with _handle_errors(), console.status(f"Importing {folder}..."):
        c = svc.import_folder(folder, parent)
    console.print(f"[green]✓[/green] Imported [bold]{c.name}[/bold] ({c.id})")
    console.print(f"  {svc.get_total_icon_count()} icons in library")


@app.command()
def add(
    ctx: typer.Context,
    collection_id: str = typer.Argument(..., help="Target collection ID"),
    files: List[Path] = typer.Argument(..., help="SVG files to add"),
) -> None:
    """Add individual SVG files to an existing collection."""
    svc = _service(ctx)
    with _handle_errors():
        icons = svc.import_icons(collection_id, files)
    console.print(f"[green]✓[/green] Added {len(icons)} icon(s)")


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------
@app.command()
def collections(ctx: typer.Context) -> None:
    """List collections as a tree."""
    svc = _service(ctx)
    rows = _collection_rows(svc.get_collections())
    if not rows:
        console.print(
            "[yellow]No collections yet.[/yellow] Try [bold]iconbox import <folder>[/bold]"
        )
        return
    table = Table(title="Collections", show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("ID", style="dim")
    table.add_column("Icons", justify="right")
    for depth, c in rows:
        table.add_row(f"{'  ' * depth}[{c.color}]●[/] {escape(c.name)}", c.id, str(c.icon_count))
    console.print(table)


@app.command()
def create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Collection name"),
    parent: Optional[str] = typer.Option(None, "--parent", "-p", help="Parent collection ID"),
) -> None:
    """Create an empty collection."""
    svc = _service(ctx)
    with _handle_errors():
        c = svc.create_collection(name, parent)
    console.print(f"[green]✓[/green] Created [bold]{c.name}[/bold] ({c.id})")


@app.command()
def rename(
    ctx: typer.Context,
    collection_id: str = typer.Argument(..., help="Collection ID"),
    new_name: str = typer.Argument(..., help="New name"),
) -> None:
    """Rename a collection."""
    svc = _service(ctx)
    with _handle_errors():
        c = svc.rename_collection(collection_id, new_name)
    console.print(f"[green]✓[/green] Renamed to [bold]{c.name}[/bold]")


@app.command()
def move(
    ctx: typer.Context,
    collection_id: str = typer.Argument(..., help="Collection ID"),
    parent: Optional[str] = typer.Option(
        None, "--parent", "-p", help="New parent collection ID (omit to make it a root)"
    ),
) -> None:
    """Move a collection under another one, or to the top level."""
    svc = _service(ctx)
    with _handle_errors():
        svc.move_collection(collection_id, parent)
        path = " / ".join(c.name for c in svc.get_collection_path(collection_id))
    console.print(f"[green]✓[/green] Moved to {path}")


@app.command()
def delete(
    ctx: typer.Context,
    collection_id: str = typer.Argument(..., help="Collection ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Delete a collection with all its subcollections and icons."""
    svc = _service(ctx)
    with _handle_errors():
        c = svc.get_collection(collection_id)
        if not yes and not typer.confirm(
            f"Delete '{c.name}' with its subcollections and icons?"
        ):
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(0)
        svc.delete_collection(collection_id)
    console.print(f"[green]✓[/green] Deleted [bold]{c.name}[/bold]")


# ---------------------------------------------------------------------------
# Icons
# ---------------------------------------------------------------------------
@app.command()
def icons(
    ctx: typer.Context,
    collection: Optional[str] = typer.Option(
        None, "--collection", "-c", help="Only icons directly in this collection"
    ),
    favorites: bool = typer.Option(False, "--favorites", "-f", help="Only favorite icons"),
    search: Optional[str] = typer.Option(
        None, "--search", "-s", help="Match name or tag (case-insensitive)"
    ),
) -> None:
    """List icons."""
    if collection and favorites:
        console.print("[red]Error:[/red] --collection and --favorites cannot be combined")
        raise typer.Exit(1)
    svc = _service(ctx)
    if collection:
        view = View.collection(collection)
    elif favorites:
        view = View.favorites()
    else:
        view = View.all()
    with _handle_errors():
        found = svc.get_view_icons(view, search)
    _print_icons(found, f"Icons ({len(found)})")
    console.print(
        f"[dim]{svc.get_total_icon_count()} total, {svc.get_favorite_count()} favorites[/dim]"
    )


@app.command()
def favorite(
    ctx: typer.Context,
    icon_id: str = typer.Argument(..., help="Icon ID"),
) -> None:
    """Toggle an icon's favorite flag."""
    svc = _service(ctx)
    with _handle_errors():
        state = svc.toggle_favorite(icon_id)
    console.print("[yellow]★[/yellow] Favorited" if state else "Removed from favorites")


@app.command()
def tag(
    ctx: typer.Context,
    icon_id: str = typer.Argument(..., help="Icon ID"),
    tags: Optional[List[str]] = typer.Argument(None, help="Tags (none clears them)"),
) -> None:
    """Replace an icon's tags."""
    svc = _service(ctx)
    with _handle_errors():
        icon = svc.update_icon_tags(icon_id, tags or [])
    console.print(f"[green]✓[/green] Tags: {', '.join(icon.tags) or '(none)'}")


@app.command("remove-icon")
def remove_icon(
    ctx: typer.Context,
    icon_id: str = typer.Argument(..., help="Icon ID"),
) -> None:
    """Delete a single icon."""
    svc = _service(ctx)
    with _handle_errors():
        svc.delete_icon(icon_id)
    console.print("[green]✓[/green] Icon deleted")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------
@settings_app.command("show")
def settings_show(ctx: typer.Context) -> None:
    """Show display settings."""
    s = _service(ctx).get_settings()
    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("theme", s.theme)
    table.add_row("icon_size", str(s.icon_size))
    table.add_row("tint_color", s.tint_color or "[dim](none)[/dim]")
    console.print(table)


@settings_app.command("set")
def settings_set(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="theme, icon_size or tint_color"),
    value: str = typer.Argument(..., help="New value (empty tint_color clears it)"),
) -> None:
    """Change one display setting."""
    svc = _service(ctx)
    with _handle_errors():
        svc.save_setting(key, value)
    console.print(f"[green]✓[/green] {key} = {value}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
