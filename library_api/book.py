from __future__ import annotations

from datetime import datetime


class Book:
    """Represents a single book record in the catalog."""

    def __init__(self, isbn: str, title: str, author: str, page_count: int,
                 short_description: str, release_date: datetime | None = None) -> None:
        self.isbn = isbn
        self.title = title
        self.author = author
        self.page_count = page_count
        self.short_description = short_description
        self.release_date = release_date

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} (ISBN: {self.isbn})"

    def __repr__(self) -> str:  # pragma: no cover
        return f"Book(isbn={self.isbn!r}, title={self.title!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict:
        return {
            "isbn": self.isbn,
            "title": self.title,
            "author": self.author,
            "page_count": self.page_count,
            "short_description": self.short_description,
            "release_date": self.release_date.isoformat() if self.release_date else None,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        # SQLite hands timestamps back as ISO text
        release_date = data.get("release_date")
        if isinstance(release_date, str):
            release_date = datetime.fromisoformat(release_date)

        return Book(
            isbn=data["isbn"],
            title=data["title"],
            author=data["author"],
            page_count=data["page_count"],
            short_description=data["short_description"],
            release_date=release_date,
        )
