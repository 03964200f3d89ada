"""Static informational endpoints."""

from typing import Any

from fastapi import APIRouter

router = APIRouter(tags=["info"])

ENDPOINTS = [
    "GET /books",
    "GET /books/:id",
    "POST /books",
    "PUT /books/:id",
    "DELETE /books/:id",
    "GET /abarca",
]


@router.get("/")
def root() -> dict[str, Any]:
    """List the available endpoints."""
    return {"message": "Books API is running", "endpoints": ENDPOINTS}


@router.get("/abarca")
def identity() -> dict[str, str]:
    """Return the author's identity payload."""
    return {"nombre_completo": "Wilver De Jesús Abarca Sánchez"}
