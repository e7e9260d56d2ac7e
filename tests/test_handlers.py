from unittest.mock import MagicMock

from library_api import handlers
from library_api.library import Library
from library_api.results import BadRequest, Created, NoContent, NotFound, Ok


def test_create_returns_created_with_location(lib, make_book):
    book = make_book()
    result = handlers.create_book(book, lib)

    assert isinstance(result, Created)
    assert result.body == book
    assert result.location == "/books/978-0-13-468599-1"
    assert result.status_code == 201


def test_create_invalid_book_never_reaches_service(make_book):
    library = MagicMock(spec=Library)
    result = handlers.create_book(make_book(isbn="INVALID", page_count=0), library)

    assert isinstance(result, BadRequest)
    assert [v.property_name for v in result.violations] == ["isbn", "pageCount"]
    library.create.assert_not_called()


def test_create_duplicate_maps_to_isbn_violation(lib, make_book):
    handlers.create_book(make_book(), lib)
    result = handlers.create_book(make_book(), lib)

    assert isinstance(result, BadRequest)
    assert result.violations == [handlers.DUPLICATE_ISBN]
    assert result.violations[0].error_message == "A book with the same ISBN already exists."


def test_get_book(lib, make_book):
    assert isinstance(handlers.get_book("978-0-13-468599-1", lib), NotFound)

    handlers.create_book(make_book(), lib)
    result = handlers.get_book("978-0-13-468599-1", lib)
    assert isinstance(result, Ok)
    assert result.body == make_book()


def test_get_books_blank_term_lists_everything():
    library = MagicMock(spec=Library)
    library.get_all.return_value = []

    for term in (None, "", "   "):
        assert handlers.get_books(library, term) == Ok([])
    library.search_by_title.assert_not_called()
    assert library.get_all.call_count == 3


def test_get_books_with_term_searches(lib, make_book):
    lib.create(make_book(isbn="1111111111", title="The Go Programmer"))
    lib.create(make_book(isbn="2222222222", title="Unrelated"))

    result = handlers.get_books(lib, "go")
    assert isinstance(result, Ok)
    assert [b.title for b in result.body] == ["The Go Programmer"]


def test_update_uses_path_isbn(lib, make_book):
    lib.create(make_book())
    submitted = make_book(isbn="0000000000", title="New Title")

    result = handlers.update_book("978-0-13-468599-1", submitted, lib)

    assert isinstance(result, Ok)
    assert result.body.isbn == "978-0-13-468599-1"
    assert lib.get_by_isbn("978-0-13-468599-1").title == "New Title"
    assert lib.get_by_isbn("0000000000") is None


def test_update_validates_before_lookup(make_book):
    library = MagicMock(spec=Library)
    result = handlers.update_book("978-0-13-468599-1", make_book(title=""), library)

    assert isinstance(result, BadRequest)
    assert [v.property_name for v in result.violations] == ["title"]
    library.update.assert_not_called()


def test_update_invalid_path_isbn_is_rejected(make_book):
    library = MagicMock(spec=Library)
    result = handlers.update_book("not-an-isbn", make_book(), library)

    assert isinstance(result, BadRequest)
    assert [v.property_name for v in result.violations] == ["isbn"]


def test_update_missing_returns_not_found(lib, make_book):
    result = handlers.update_book("978-0-13-468599-1", make_book(), lib)
    assert isinstance(result, NotFound)


def test_delete(lib, make_book):
    assert isinstance(handlers.delete_book("978-0-13-468599-1", lib), NotFound)

    lib.create(make_book())
    result = handlers.delete_book("978-0-13-468599-1", lib)
    assert isinstance(result, NoContent)
    assert result.status_code == 204
