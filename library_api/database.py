import logging
import sqlite3

from library_api.config import settings
from library_api.exceptions import StorageError

logger = logging.getLogger(__name__)


def get_db_connection(db_file: str | None = None, timeout: float | None = None) -> sqlite3.Connection:
    """Establishes a connection to the SQLite database."""
    conn = sqlite3.connect(
        db_file or settings.database_file,
        timeout=settings.database_timeout if timeout is None else timeout,
    )
    conn.row_factory = sqlite3.Row
    return conn


def create_tables(db_file: str | None = None, timeout: float | None = None) -> None:
    """Creates the books table if it doesn't exist."""
    try:
        conn = get_db_connection(db_file, timeout)
    except sqlite3.Error as e:
        raise StorageError(f"Could not open database: {e}") from e
    try:
        with conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS books (
                    isbn TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    author TEXT NOT NULL,
                    page_count INTEGER NOT NULL,
                    short_description TEXT NOT NULL,
                    release_date TEXT
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_books_title ON books(title)")
    except sqlite3.Error as e:
        raise StorageError(f"Could not create tables: {e}") from e
    finally:
        conn.close()


def initialize_database(db_file: str | None = None, timeout: float | None = None) -> None:
    """Initializes the database, creating tables if needed."""
    create_tables(db_file, timeout)
    logger.info("Database ready at %s", db_file or settings.database_file)
