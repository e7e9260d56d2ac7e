from typing import Optional

import typer
import uvicorn

from library_api.config import settings, setup_logging
from library_api.database import initialize_database
from library_api.exceptions import StorageError
from library_api.library import Library
from library_api.store import BookStore
from library_api.ui_helpers import print_book_result, print_list_result, set_output_mode

app = typer.Typer(help="Library API command line")


def _get_library(ctx: typer.Context) -> Library:
    db_file = (ctx.obj or {}).get("db_file") or settings.database_file
    initialize_database(db_file, settings.database_timeout)
    return Library(BookStore(db_file, settings.database_timeout))


@app.callback()
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output format: plain | json | rich (default: plain)",
    ),
    db_file: Optional[str] = typer.Option(
        None, "--db-file", help="SQLite file to use instead of LIBRARY_DB_FILE",
    ),
):
    """Global CLI options."""
    setup_logging(settings.log_level, settings.log_file)
    if output:
        set_output_mode(output)
    ctx.obj = {"db_file": db_file}


@app.command("serve")
def cli_serve(
    host: str = typer.Option(settings.api_host, help="Interface to bind"),
    port: int = typer.Option(settings.api_port, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the HTTP API with uvicorn."""
    print(f"Starting API on http://{host}:{port}")
    uvicorn.run("library_api.api:create_app", factory=True, host=host, port=port, reload=reload)


@app.command("init-db")
def cli_init_db(ctx: typer.Context):
    """Create the books table if it does not exist."""
    db_file = (ctx.obj or {}).get("db_file") or settings.database_file
    try:
        initialize_database(db_file, settings.database_timeout)
    except StorageError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    print(f"Database initialized: {db_file}")


@app.command("list")
def cli_list(
    ctx: typer.Context,
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Filter by title"),
):
    """List all books, optionally filtered by title."""
    lib = _get_library(ctx)
    books = lib.search_by_title(search) if search and search.strip() else lib.get_all()
    print_list_result(books)


@app.command("find")
def cli_find(ctx: typer.Context, isbn: str):
    """Find a book by ISBN and show its details."""
    book = _get_library(ctx).get_by_isbn(isbn)
    if book:
        print_book_result(book)
    else:
        print(f"Book with ISBN {isbn} not found.")


@app.command("remove")
def cli_remove(ctx: typer.Context, isbn: str):
    """Remove a book by ISBN."""
    if _get_library(ctx).delete(isbn):
        print(f"Book with ISBN {isbn} has been removed.")
    else:
        print(f"Book with ISBN {isbn} not found.")


if __name__ == "__main__":
    app()
