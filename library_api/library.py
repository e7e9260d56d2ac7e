import logging
from typing import List, Optional

from library_api.book import Book
from library_api.exceptions import DuplicateKeyError
from library_api.store import BookStore

logger = logging.getLogger(__name__)


class Library:
    """Business rules over the book catalog.

    Expected conditions (duplicate ISBN, missing record) come back as
    ``False`` or ``None``. Only ``StorageError`` is raised, and only when the
    store itself fails.
    """

    def __init__(self, store: BookStore) -> None:
        self.store = store

    # ------------------------- Core operations ------------------------- #
    def create(self, book: Book) -> bool:
        """Insert ``book`` unless its ISBN is already taken."""
        if self.store.get(book.isbn) is not None:
            logger.warning("Rejected duplicate book %s", book.isbn)
            return False
        # A concurrent create can slip past the lookup; the primary key decides.
        try:
            self.store.insert(book)
        except DuplicateKeyError:
            logger.warning("Rejected duplicate book %s (constraint)", book.isbn)
            return False
        logger.info("Created book %s", book.isbn)
        return True

    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        return self.store.get(isbn)

    def get_all(self) -> List[Book]:
        return self.store.list_all()

    def search_by_title(self, term: str) -> List[Book]:
        """Case-insensitive substring match on the title."""
        return self.store.search_by_title(term)

    def update(self, book: Book) -> bool:
        """Replace every field of the stored book with the same ISBN.

        Never inserts: returns ``False`` when no such book exists.
        """
        updated = self.store.update(book)
        if updated:
            logger.info("Updated book %s", book.isbn)
        return updated

    def delete(self, isbn: str) -> bool:
        deleted = self.store.delete(isbn)
        if deleted:
            logger.info("Deleted book %s", isbn)
        return deleted
