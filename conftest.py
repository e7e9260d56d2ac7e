from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from library_api.api import create_app
from library_api.book import Book
from library_api.config import Settings
from library_api.database import initialize_database
from library_api.library import Library
from library_api.store import BookStore

TEST_API_KEY = "test-secret-key"


@pytest.fixture
def db_file(tmp_path, request):
    # Unique database file per test
    return str(tmp_path / f"test_{request.node.name}.db")


@pytest.fixture
def lib(db_file):
    initialize_database(db_file)
    return Library(BookStore(db_file))


@pytest.fixture
def make_book():
    def _make_book(isbn="978-0-13-468599-1", title="The Dirty Coder", author="Paul Osorio",
                   page_count=100, short_description="Short description test",
                   release_date=datetime(2020, 1, 15, 9, 30)):
        return Book(isbn=isbn, title=title, author=author, page_count=page_count,
                    short_description=short_description, release_date=release_date)
    return _make_book


@pytest.fixture
def test_settings(db_file):
    return Settings(api_key=TEST_API_KEY, database_file=db_file)


@pytest.fixture
def client(test_settings):
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"Authorization": TEST_API_KEY}
