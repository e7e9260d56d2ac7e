from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from library_api.book import Book
from library_api.validators import Violation

# Largest accepted page count (signed 32-bit)
MAX_PAGE_COUNT = 2**31 - 1


class BookModel(BaseModel):
    """Wire form of a book.

    Missing fields fall back to empty values so that the field rules, not the
    JSON decoder, report what is wrong with a submission. Keys are matched
    case-insensitively and may be camelCase or snake_case.
    """

    model_config = ConfigDict(populate_by_name=True)

    isbn: Optional[str] = ""
    title: Optional[str] = ""
    author: Optional[str] = ""
    page_count: Optional[int] = Field(default=0, alias="pageCount", le=MAX_PAGE_COUNT)
    short_description: Optional[str] = Field(default="", alias="shortDescription")
    release_date: Optional[datetime] = Field(default=None, alias="releaseDate")

    @model_validator(mode="before")
    @classmethod
    def _match_keys_case_insensitively(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known = {}
        for name, info in cls.model_fields.items():
            known[name.lower()] = name
            if info.alias:
                known[info.alias.lower()] = name
        normalized = {}
        for key, value in data.items():
            normalized[known.get(str(key).lower(), key)] = value
        return normalized

    def to_book(self) -> Book:
        return Book(
            isbn=self.isbn,
            title=self.title,
            author=self.author,
            page_count=self.page_count,
            short_description=self.short_description,
            release_date=self.release_date,
        )

    @classmethod
    def from_book(cls, book: Book) -> "BookModel":
        return cls(
            isbn=book.isbn,
            title=book.title,
            author=book.author,
            page_count=book.page_count,
            short_description=book.short_description,
            release_date=book.release_date,
        )


class ValidationErrorModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    property_name: str = Field(alias="propertyName")
    error_message: str = Field(alias="errorMessage")

    @classmethod
    def from_violation(cls, violation: Violation) -> "ValidationErrorModel":
        return cls(property_name=violation.property_name, error_message=violation.error_message)


class HealthModel(BaseModel):
    status: str
    timestamp: str
    total_books: int
    db: bool


def dump_books(books: List[Book]) -> list:
    return [BookModel.from_book(b).model_dump(mode="json", by_alias=True) for b in books]
