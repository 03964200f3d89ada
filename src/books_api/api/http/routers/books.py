"""Book API router with CRUD operations.

Domain errors raised by the service propagate to the exception handlers
registered on the application, which turn them into JSON error responses.
"""

import re
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, status
from pydantic import BeforeValidator

from src.books_api.api.http.deps import get_book_service
from src.books_api.core.services.book_service import BookService
from src.books_api.entities.book import Book, BookPayload

router = APIRouter(prefix="/books", tags=["books"])

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def _check_id_text(value: Any) -> Any:
    # Plain decimal digits only; "1.0", " 1" and "1e3" are not ids.
    if isinstance(value, str) and not _ID_PATTERN.fullmatch(value):
        raise ValueError("book id must be an integer")
    return value


BookId = Annotated[
    int,
    BeforeValidator(_check_id_text),
    Path(ge=-(2**63), le=2**63 - 1, description="Book identifier"),
]


@router.get("", response_model=list[Book])
def list_books(service: BookService = Depends(get_book_service)) -> list[Book]:
    """List all books."""
    return service.get_all()


@router.get("/{book_id}", response_model=Book)
def get_book(book_id: BookId, service: BookService = Depends(get_book_service)) -> Book:
    """Get a book by ID."""
    return service.get_by_id(book_id)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_book(
    payload: BookPayload,
    service: BookService = Depends(get_book_service),
) -> dict[str, Any]:
    """Create a new book."""
    book = service.create_book(Book.from_payload(payload))
    return {"message": "Book created successfully", "book": book.model_dump()}


@router.put("/{book_id}")
def update_book(
    book_id: BookId,
    payload: BookPayload,
    service: BookService = Depends(get_book_service),
) -> dict[str, Any]:
    """Replace the title and year of a book."""
    book = service.update_book(Book.from_payload(payload, book_id=book_id))
    return {"message": "Book updated successfully", "book": book.model_dump()}


@router.delete("/{book_id}")
def delete_book(
    book_id: BookId, service: BookService = Depends(get_book_service)
) -> dict[str, str]:
    """Delete a book."""
    service.delete_book(book_id)
    return {"message": "Book deleted successfully"}
