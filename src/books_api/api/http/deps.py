"""FastAPI dependency implementations."""

from fastapi import Request

from src.books_api.api.http.app_data import ApplicationDependencies
from src.books_api.core.services.book_service import BookService
from src.books_api.core.services.database.db_session import DbSessionService


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_database_service(request: Request) -> DbSessionService:
    """Get the shared database service."""
    return get_app_dependencies(request).database_service


def get_book_service(request: Request) -> BookService:
    """Get the book service built at startup."""
    return get_app_dependencies(request).book_service
