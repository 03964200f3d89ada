"""Application service for books."""

from src.books_api.core.exceptions import ValidationError
from src.books_api.entities.book import Book, BookRepository


class BookService:
    """Business operations on books, delegated to a ``BookRepository``."""

    def __init__(self, repository: BookRepository) -> None:
        self._repository = repository

    def create_book(self, book: Book) -> Book:
        return self._repository.create(book)

    def get_all(self) -> list[Book]:
        return self._repository.get_all()

    def get_by_id(self, book_id: int) -> Book:
        return self._repository.get_by_id(book_id)

    def update_book(self, book: Book) -> Book:
        """Replace the title and year of an existing book.

        Raises:
            ValidationError: If the book carries no identifier.
            NotFoundError: If no book has that identifier.
        """
        if not book.id:
            raise ValidationError("book ID is required for update")
        return self._repository.update(book)

    def delete_book(self, book_id: int) -> None:
        self._repository.delete(book_id)
