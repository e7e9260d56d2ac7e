import logging
import sqlite3
from typing import List, Optional

from library_api.book import Book
from library_api.database import get_db_connection
from library_api.exceptions import DuplicateKeyError, StorageError

logger = logging.getLogger(__name__)

_COLUMNS = "isbn, title, author, page_count, short_description, release_date"


class BookStore:
    """Keyed CRUD over the ``books`` table.

    Every call opens its own connection and commits or rolls back before
    returning, so the store can be shared between concurrent requests.
    Driver errors are re-raised as ``StorageError``.
    """

    def __init__(self, db_file: str, timeout: float | None = None) -> None:
        self.db_file = db_file
        self.timeout = timeout

    def _connect(self) -> sqlite3.Connection:
        try:
            return get_db_connection(self.db_file, self.timeout)
        except sqlite3.Error as e:
            raise StorageError(f"Could not open database: {e}") from e

    def _query(self, sql: str, params: tuple = ()) -> List[Book]:
        conn = self._connect()
        try:
            rows = conn.execute(sql, params).fetchall()
            return [Book.from_dict(dict(row)) for row in rows]
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def _execute(self, sql: str, params: tuple) -> int:
        conn = self._connect()
        try:
            with conn:
                cursor = conn.execute(sql, params)
            return cursor.rowcount
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    @staticmethod
    def _row_params(book: Book) -> tuple:
        release_date = book.release_date.isoformat() if book.release_date else None
        return (book.title, book.author, book.page_count, book.short_description, release_date)

    def get(self, isbn: str) -> Optional[Book]:
        books = self._query(f"SELECT {_COLUMNS} FROM books WHERE isbn = ?", (isbn,))
        return books[0] if books else None

    def list_all(self) -> List[Book]:
        return self._query(f"SELECT {_COLUMNS} FROM books ORDER BY title")

    def search_by_title(self, term: str) -> List[Book]:
        # instr() keeps % and _ in the term literal, unlike LIKE
        return self._query(
            f"SELECT {_COLUMNS} FROM books WHERE instr(lower(title), lower(?)) > 0 ORDER BY title",
            (term,),
        )

    def insert(self, book: Book) -> None:
        """Insert a new row; raises ``DuplicateKeyError`` if the ISBN is taken."""
        try:
            self._execute(
                f"INSERT INTO books ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                (book.isbn,) + self._row_params(book),
            )
        except StorageError as e:
            cause = e.__cause__
            if isinstance(cause, sqlite3.IntegrityError) and "books.isbn" in str(cause):
                raise DuplicateKeyError(f"Book with ISBN {book.isbn} already exists.") from cause
            raise

    def update(self, book: Book) -> bool:
        rowcount = self._execute(
            """
            UPDATE books
               SET title = ?, author = ?, page_count = ?, short_description = ?, release_date = ?
             WHERE isbn = ?
            """,
            self._row_params(book) + (book.isbn,),
        )
        return rowcount > 0

    def delete(self, isbn: str) -> bool:
        return self._execute("DELETE FROM books WHERE isbn = ?", (isbn,)) > 0

    def count(self) -> int:
        conn = self._connect()
        try:
            return conn.execute("SELECT COUNT(*) FROM books").fetchone()[0]
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        finally:
            conn.close()
