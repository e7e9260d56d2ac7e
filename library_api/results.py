"""Outcomes returned by the request handlers.

Each variant carries its own HTTP status so the transport layer only has to
serialize the payload.
"""

from dataclasses import dataclass, field
from typing import ClassVar, List, Union

from library_api.book import Book
from library_api.validators import Violation


@dataclass
class Ok:
    body: Union[Book, List[Book]]
    status_code: ClassVar[int] = 200


@dataclass
class Created:
    body: Book
    location: str
    status_code: ClassVar[int] = 201


@dataclass
class BadRequest:
    violations: List[Violation] = field(default_factory=list)
    status_code: ClassVar[int] = 400


@dataclass
class NotFound:
    status_code: ClassVar[int] = 404


@dataclass
class NoContent:
    status_code: ClassVar[int] = 204


Result = Union[Ok, Created, BadRequest, NotFound, NoContent]
