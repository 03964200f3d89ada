"""Entities organized by business concept.

Each entity has its own package containing:
- entity.py: Domain model and request payloads
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .book import Book, BookPayload, BookRepository, BookTable, SqlBookRepository

__all__ = ["Book", "BookPayload", "BookRepository", "BookTable", "SqlBookRepository"]
