"""Schema management for the books table."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel

from src.books_api.core.exceptions import StorageError
from src.books_api.entities.book import BookTable


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create the books table unless it already exists."""
        try:
            SQLModel.metadata.create_all(self._engine, tables=[BookTable.__table__])
        except SQLAlchemyError as e:
            raise StorageError(f"could not create the books table: {e}") from e
        logger.info("Table 'books' verified or created")

    def drop_all(self) -> None:
        """Drop the books table."""
        try:
            SQLModel.metadata.drop_all(self._engine, tables=[BookTable.__table__])
        except SQLAlchemyError as e:
            raise StorageError(f"could not drop the books table: {e}") from e
        logger.info("Table 'books' dropped")
