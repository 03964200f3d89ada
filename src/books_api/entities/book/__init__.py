"""Book entity module.

This module contains all Book-related classes organized by responsibility:
- Book / BookPayload: Domain entity and accepted request body
- BookTable: Database persistence model
- BookRepository / SqlBookRepository: Data access layer
"""

from .entity import Book, BookPayload
from .repository import BookRepository, SqlBookRepository
from .table import BookTable

__all__ = ["Book", "BookPayload", "BookRepository", "BookTable", "SqlBookRepository"]
