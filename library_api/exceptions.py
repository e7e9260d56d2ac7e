class LibraryError(Exception):
    """Base class for errors raised by the library package."""


class StorageError(LibraryError):
    """The book store could not complete an operation.

    Wraps the underlying ``sqlite3.Error``; callers should let it propagate
    to the API's fault handler rather than treat it as a business outcome.
    """


class DuplicateKeyError(StorageError):
    """An insert collided with an existing primary key."""
