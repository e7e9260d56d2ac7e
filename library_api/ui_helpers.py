import json
import os
from typing import Callable, Dict, List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from library_api.book import Book

# The --output choice is kept in the environment so every command sees it
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"
OUTPUT_MODES = ("plain", "json", "rich")
DEFAULT_OUTPUT_MODE = "plain"

_console = Console()


def set_output_mode(mode: str) -> None:
    """Select the output mode; unknown modes leave the current one in place."""
    normalized = (mode or "").strip().lower()
    if normalized in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = normalized


def get_output_mode() -> str:
    mode = os.environ.get(OUTPUT_MODE_ENV, "").strip().lower()
    return mode if mode in OUTPUT_MODES else DEFAULT_OUTPUT_MODE


def _release(book: Book) -> str:
    return book.release_date.date().isoformat() if book.release_date else "-"


def _summary(book: Book) -> dict:
    return {"isbn": book.isbn, "title": book.title, "author": book.author, "pageCount": book.page_count}


def _details(book: Book) -> List[tuple]:
    return [
        ("Title", book.title),
        ("Author", book.author),
        ("ISBN", book.isbn),
        ("Pages", book.page_count),
        ("Released", _release(book)),
    ]


def _list_plain(books: List[Book]) -> None:
    for b in books:
        print(f"{b.isbn} - {b.title} by {b.author}")


def _list_json(books: List[Book]) -> None:
    print(json.dumps([_summary(b) for b in books], ensure_ascii=False))


def _list_rich(books: List[Book]) -> None:
    table = Table(title=f"Books ({len(books)})", header_style="bold cyan")
    for column, justify in (("ISBN", "left"), ("Title", "left"), ("Author", "left"), ("Pages", "right")):
        table.add_column(column, justify=justify)
    for b in books:
        table.add_row(*(str(v) for v in _summary(b).values()))
    _console.print(table)


def _book_plain(book: Book) -> None:
    print("Book Found")
    for label, value in _details(book):
        print(f"{label}: {value}")


def _book_json(book: Book) -> None:
    print(json.dumps(book.to_dict(), ensure_ascii=False))


def _book_rich(book: Book) -> None:
    lines = [f"[bold]{label}:[/] {value}" for label, value in _details(book)]
    lines += ["", book.short_description or ""]
    _console.print(Panel.fit("\n".join(lines), title="Book Found", border_style="blue"))


_LIST_RENDERERS: Dict[str, Callable[[List[Book]], None]] = {
    "plain": _list_plain,
    "json": _list_json,
    "rich": _list_rich,
}

_BOOK_RENDERERS: Dict[str, Callable[[Book], None]] = {
    "plain": _book_plain,
    "json": _book_json,
    "rich": _book_rich,
}


def print_list_result(books: List[Book]) -> None:
    """Print books as 'ISBN - Title by Author' lines, a JSON array, or a table."""
    if not books:
        print("No books in library.")
        return
    _LIST_RENDERERS[get_output_mode()](books)


def print_book_result(book: Book) -> None:
    _BOOK_RENDERERS[get_output_mode()](book)
