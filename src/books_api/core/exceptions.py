"""Domain-level exceptions.

Every failure a request can run into is a subclass of ``BookError``. Each one
carries the HTTP status it is reported with, so the API layer can translate
them uniformly.
"""


class BookError(Exception):
    """Base class for all books API errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BookError):
    """The request is malformed or violates a business rule."""

    status_code = 400


class NotFoundError(BookError):
    """No book exists with the requested identifier."""

    status_code = 404

    def __init__(self, book_id: int) -> None:
        super().__init__(f"book with id {book_id} not found")
        self.book_id = book_id


class StorageError(BookError):
    """The database could not be reached or rejected the statement."""

    status_code = 500
