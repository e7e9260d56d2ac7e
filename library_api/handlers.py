"""Request handlers for the books resource.

Handlers take already-decoded input plus the ``Library`` service and return
a ``Result``. Validation always runs before any store access.
"""

from typing import Optional

from library_api.book import Book
from library_api.library import Library
from library_api.results import BadRequest, Created, NoContent, NotFound, Ok, Result
from library_api.validators import Violation, validate_book

BASE_ROUTE = "/books"

DUPLICATE_ISBN = Violation("isbn", "A book with the same ISBN already exists.")


def book_location(isbn: str) -> str:
    return f"{BASE_ROUTE}/{isbn}"


def create_book(book: Book, library: Library) -> Result:
    violations = validate_book(book)
    if violations:
        return BadRequest(violations)

    if not library.create(book):
        return BadRequest([DUPLICATE_ISBN])

    return Created(book, book_location(book.isbn))


def get_books(library: Library, search_term: Optional[str] = None) -> Result:
    if search_term is not None and search_term.strip():
        return Ok(library.search_by_title(search_term))
    return Ok(library.get_all())


def get_book(isbn: str, library: Library) -> Result:
    book = library.get_by_isbn(isbn)
    if book is None:
        return NotFound()
    return Ok(book)


def update_book(isbn: str, book: Book, library: Library) -> Result:
    # The path decides which record is updated
    book.isbn = isbn

    violations = validate_book(book)
    if violations:
        return BadRequest(violations)

    if not library.update(book):
        return NotFound()

    return Ok(book)


def delete_book(isbn: str, library: Library) -> Result:
    if not library.delete(isbn):
        return NotFound()
    return NoContent()
