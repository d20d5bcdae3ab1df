"""Library catalog command line interface."""

from pathlib import Path
from typing import Any

import typer
import yaml
from rich.console import Console
from rich.table import Table

from library_catalog.core.errors import BookValidationError
from library_catalog.core.services import DbSessionService
from library_catalog.entities.book import Book, BookRepository
from library_catalog.runtime.context import get_config
from library_catalog.runtime.init_db import init_db

DEFAULT_SEED_FILE = Path(__file__).parent / "data" / "seed_books.yaml"

console = Console()

app = typer.Typer(
    help="📚 Library Catalog CLI - manage the catalog database and web server",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def load_seed_file(path: Path) -> list[dict[str, Any]]:
    """Read the ``books`` list from a YAML seed file."""
    with open(path) as f:
        loaded = yaml.safe_load(f) or {}
    books = loaded.get("books", []) if isinstance(loaded, dict) else []
    if not isinstance(books, list):
        raise ValueError(f"'books' in {path} must be a list")
    return books


def seed_books(
    repository: BookRepository, records: list[dict[str, Any]]
) -> tuple[list[Book], list[tuple[dict[str, Any], BookValidationError]]]:
    """Create a book per record, collecting the records that fail validation."""
    created = []
    rejected = []
    for record in records:
        try:
            created.append(repository.create(record))
        except BookValidationError as exc:
            rejected.append((record, exc))
    return created, rejected


def _books_table(title: str, books: list[Book]) -> Table:
    table = Table(title=title)
    table.add_column("Title", style="green")
    table.add_column("Author", style="cyan")
    table.add_column("Genre", style="magenta")
    table.add_column("Year", style="yellow")
    table.add_column("ID", style="dim")
    for book in books:
        table.add_row(
            book.title,
            book.author,
            book.genre or "",
            "" if book.year is None else str(book.year),
            book.id,
        )
    return table


@app.command("init-db")
def init_db_command() -> None:
    """Create the catalog tables."""
    init_db()
    console.print("[green]✅ Database tables created[/green]")


@app.command("seed")
def seed(
    path: Path = typer.Argument(
        DEFAULT_SEED_FILE, exists=True, dir_okay=False, help="YAML file with a 'books' list"
    ),
) -> None:
    """Load books from a YAML seed file."""
    try:
        records = load_seed_file(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]❌ Failed to read {path}: {e}[/red]")
        raise typer.Exit(code=1) from e

    init_db()
    database_service = DbSessionService(get_config())
    try:
        with database_service.session_scope() as session:
            created, rejected = seed_books(BookRepository(session), records)
    finally:
        database_service.dispose()

    console.print(_books_table(f"Seeded {len(created)} books", created))
    for record, exc in rejected:
        console.print(f"[yellow]Skipped {record!r}: {exc}[/yellow]")


@app.command("list-books")
def list_books(
    search: str = typer.Option("", "--search", "-s", help="Substring to match"),
) -> None:
    """Print the catalog, optionally filtered by a search term."""
    database_service = DbSessionService(get_config())
    try:
        with database_service.session_scope() as session:
            books = BookRepository(session).search(search)
    finally:
        database_service.dispose()

    if not books:
        console.print("[yellow]No books found[/yellow]")
        return
    console.print(_books_table(f"{len(books)} books", books))


@app.command("serve")
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (defaults to config)"),
    port: int = typer.Option(None, "--port", "-p", help="Port (defaults to config)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the web application with uvicorn."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "library_catalog.api.http.app:app",
        host=host or config.app.host,
        port=port or config.app.port,
        reload=reload,
        access_log=False,  # We handle access logging in middleware
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
