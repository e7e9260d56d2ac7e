from fastapi.testclient import TestClient

from library_api.api import create_app


def test_full_book_lifecycle(client, auth_headers):
    """Test complete book lifecycle: create, read, update, delete."""
    book = {
        "isbn": "978-0-13-468599-1",
        "title": "Systems Design",
        "author": "A. Engineer",
        "pageCount": 200,
        "shortDescription": "intro",
    }

    # Create
    response = client.post("/books", json=book, headers=auth_headers)
    assert response.status_code == 201
    created = response.json()
    for key, value in book.items():
        assert created[key] == value

    # Read
    response = client.get("/books/978-0-13-468599-1", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == created

    # Listed and searchable
    assert client.get("/books", headers=auth_headers).json() == [created]
    assert client.get("/books?searchTerm=DESIGN", headers=auth_headers).json() == [created]

    # Update
    response = client.put("/books/978-0-13-468599-1", json={**book, "pageCount": 250}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["pageCount"] == 250

    # Delete
    response = client.delete("/books/978-0-13-468599-1", headers=auth_headers)
    assert response.status_code == 204

    # Verify deletion
    response = client.get("/books/978-0-13-468599-1", headers=auth_headers)
    assert response.status_code == 404


def test_books_survive_app_restart(test_settings, auth_headers):
    book = {
        "isbn": "0134685997",
        "title": "Effective Java",
        "author": "Joshua Bloch",
        "pageCount": 412,
        "shortDescription": "Best practices for the Java platform",
        "releaseDate": "2017-12-27T00:00:00",
    }
    with TestClient(create_app(test_settings)) as first:
        assert first.post("/books", json=book, headers=auth_headers).status_code == 201

    with TestClient(create_app(test_settings)) as second:
        response = second.get("/books/0134685997", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == book
