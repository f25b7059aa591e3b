"""
Book Pydantic Schemas

Schemas:
- BookCreate: Fields accepted when adding a book
- BookOut: A book in listings and search results
- BookDetailOut: A single book, including who added it
- BookListResponse / SearchResponse / BookDetailResponse: Response bodies
"""

from datetime import datetime

from pydantic import Field, field_validator, model_validator

from bookreviews.schemas.base import APIModel
from bookreviews.schemas.review import ReviewOut, ReviewsPagination


class BookCreate(APIModel):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "1984",
        "author": "George Orwell",
        "genre": "Dystopian Fiction",
        "description": "A dystopian social science fiction novel",
        "publishedYear": 1949
    }
    """

    title: str | None = Field(
        default=None,
        max_length=500,
        description="Book title",
        examples=["1984", "The Great Gatsby"],
    )
    author: str | None = Field(
        default=None,
        max_length=255,
        description="Author name",
        examples=["George Orwell"],
    )
    genre: str | None = Field(
        default=None,
        max_length=100,
        description="Genre label",
        examples=["Dystopian Fiction"],
    )
    description: str | None = Field(
        default=None,
        max_length=5000,
        description="Book description or summary",
    )
    published_year: int | None = Field(
        default=None,
        ge=0,
        le=9999,
        description="Year of publication",
        examples=[1949],
    )

    @field_validator("title", "author", "genre")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v

    @model_validator(mode="after")
    def require_core_fields(self) -> "BookCreate":
        """Title, author and genre must all be present and non-blank."""
        if not (self.title and self.author and self.genre):
            raise ValueError("Title, author, and genre are required")
        return self


class BookOut(APIModel):
    """A book as shown in listings and search results."""

    id: str
    title: str
    author: str
    genre: str
    description: str
    published_year: int | None = None
    average_rating: float
    total_reviews: int
    created_at: datetime


class BookDetailOut(BookOut):
    added_by: str


class BookCreatedResponse(APIModel):
    message: str
    book: BookOut


class BooksPagination(APIModel):
    current_page: int
    total_pages: int
    total_books: int
    has_next: bool
    has_prev: bool


class BookListResponse(APIModel):
    books: list[BookOut]
    pagination: BooksPagination


class SearchPagination(APIModel):
    current_page: int
    total_pages: int
    total_results: int
    has_next: bool
    has_prev: bool


class SearchResponse(APIModel):
    query: str
    books: list[BookOut]
    pagination: SearchPagination


class BookDetailResponse(APIModel):
    book: BookDetailOut
    reviews: list[ReviewOut]
    reviews_pagination: ReviewsPagination
