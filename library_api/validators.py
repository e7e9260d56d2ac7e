import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from library_api.book import Book


@dataclass(frozen=True)
class Violation:
    """A single field-level reason why a candidate book was rejected."""

    property_name: str
    error_message: str

    def to_dict(self) -> dict:
        return {"propertyName": self.property_name, "errorMessage": self.error_message}


class ISBNValidator:
    """ISBN shape check: 10 or 13 digits, only digits and hyphens allowed.

    No checksum is computed; hyphen placement is free.
    """

    PATTERN = re.compile(r"^(?=(?:\D*\d){10}(?:(?:\D*\d){3})?\Z)[\d-]+\Z")

    @staticmethod
    def is_valid_isbn(isbn: Optional[str]) -> bool:
        if not isinstance(isbn, str):
            return False
        return ISBNValidator.PATTERN.match(isbn) is not None


class TextValidator:

    @staticmethod
    def is_not_empty(text: Optional[str]) -> bool:
        if text is None:
            return False
        return bool(str(text).strip())


def _is_positive(value: Any) -> bool:
    try:
        return value is not None and value > 0
    except TypeError:
        return False


# (predicate, property name, message), evaluated in order without short-circuit
Rule = Tuple[Callable[[Book], bool], str, str]

BOOK_RULES: Tuple[Rule, ...] = (
    (lambda b: ISBNValidator.is_valid_isbn(b.isbn), "isbn", "Value was not a valid ISBN-13"),
    (lambda b: TextValidator.is_not_empty(b.title), "title", "'Title' must not be empty."),
    (lambda b: TextValidator.is_not_empty(b.short_description), "shortDescription",
     "'Short Description' must not be empty."),
    (lambda b: _is_positive(b.page_count), "pageCount", "'Page Count' must be greater than '0'."),
    (lambda b: TextValidator.is_not_empty(b.author), "author", "'Author' must not be empty."),
)


def validate_book(book: Book, rules: Sequence[Rule] = BOOK_RULES) -> List[Violation]:
    """Run every rule against ``book`` and collect the failures.

    An empty list means the book may be stored.
    """
    return [Violation(name, message) for check, name, message in rules if not check(book)]
