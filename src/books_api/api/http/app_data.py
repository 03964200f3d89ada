from dataclasses import dataclass

from src.books_api.core.services.book_service import BookService
from src.books_api.core.services.database.db_session import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    book_service: BookService
