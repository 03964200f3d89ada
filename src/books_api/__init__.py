"""Books API.

A small FastAPI service exposing CRUD operations over a single ``books`` table.
"""

__version__ = "0.1.0"
