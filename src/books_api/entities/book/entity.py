"""Entity: Book."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class BookPayload(BaseModel):
    """Request body accepted when creating or replacing a book."""

    model_config = ConfigDict(extra="ignore")

    title: StrictStr = Field(min_length=1, max_length=255, description="Book title")
    year: StrictInt = Field(ge=-(2**31), le=2**31 - 1, description="Publication year")


class Book(BaseModel):
    """Book entity representing a book in the system.

    ``id`` stays ``None`` until the book has been stored; the database assigns it.
    """

    id: int | None = Field(default=None, description="Identifier assigned by the database")
    title: str = Field(description="Book title")
    year: int = Field(description="Publication year")

    @classmethod
    def from_payload(cls, payload: BookPayload, book_id: int | None = None) -> "Book":
        return cls(id=book_id, title=payload.title, year=payload.year)
