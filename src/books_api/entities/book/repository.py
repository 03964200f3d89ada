"""Data-access layer for books."""

from typing import Protocol

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from src.books_api.core.exceptions import NotFoundError, StorageError
from src.books_api.core.services.database.db_session import DbSessionService

from .entity import Book
from .table import BookTable


class BookRepository(Protocol):
    """Storage operations on books."""

    def create(self, book: Book) -> Book: ...

    def get_all(self) -> list[Book]: ...

    def get_by_id(self, book_id: int) -> Book: ...

    def update(self, book: Book) -> Book: ...

    def delete(self, book_id: int) -> None: ...


class SqlBookRepository:
    """``BookRepository`` backed by the ``books`` table.

    Every call runs in its own short session taken from the shared engine.
    Driver failures are re-raised as :class:`StorageError`.
    """

    def __init__(self, database: DbSessionService) -> None:
        self._database = database

    def create(self, book: Book) -> Book:
        row = BookTable(title=book.title, year=book.year)
        try:
            with self._database.session_scope() as session:
                session.add(row)
                session.flush()
                book.id = row.id
        except SQLAlchemyError as e:
            logger.error("Error inserting book: {}", e)
            raise StorageError(str(e)) from e

        logger.info("Created book {}", book.id)
        return book

    def get_all(self) -> list[Book]:
        statement = select(BookTable).order_by(BookTable.id)
        try:
            with self._database.session_scope() as session:
                rows = session.exec(statement).all()
                return [Book.model_validate(row, from_attributes=True) for row in rows]
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def get_by_id(self, book_id: int) -> Book:
        try:
            with self._database.session_scope() as session:
                row = session.get(BookTable, book_id)
                if row is None:
                    raise NotFoundError(book_id)
                return Book.model_validate(row, from_attributes=True)
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def update(self, book: Book) -> Book:
        try:
            with self._database.session_scope() as session:
                row = session.get(BookTable, book.id)
                if row is None:
                    raise NotFoundError(book.id)
                row.title = book.title
                row.year = book.year
                session.add(row)
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

        logger.info("Updated book {}", book.id)
        return book

    def delete(self, book_id: int) -> None:
        try:
            with self._database.session_scope() as session:
                row = session.get(BookTable, book_id)
                if row is None:
                    raise NotFoundError(book_id)
                session.delete(row)
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

        logger.info("Deleted book {}", book_id)
