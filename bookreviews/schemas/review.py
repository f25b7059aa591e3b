"""
Review Pydantic Schemas

Schemas:
- ReviewCreate: Rating and optional comment for a new review
- ReviewUpdate: Partial update; unset fields are left unchanged
- ReviewOut: A review as listed on the book detail page
- ReviewCreatedResponse / ReviewUpdatedResponse: Mutation results
- ReviewsPagination: Pagination metadata for a book's reviews

Rating range (1-5) is checked by the rating engine so create and update
report the same errors whether called over HTTP or directly. The schemas
only reject values that are not whole JSON numbers (strings, floats, booleans).
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from bookreviews.schemas.base import APIModel


def _whole_rating(message: str):
    def check(v: Any) -> Any:
        if v is not None and (isinstance(v, bool) or not isinstance(v, int)):
            raise ValueError(message)
        return v

    return check


NewRating = Annotated[
    int | None,
    BeforeValidator(_whole_rating("Rating is required and must be between 1 and 5")),
]
RatingValue = Annotated[int | None, BeforeValidator(_whole_rating("Rating must be between 1 and 5"))]


class ReviewCreate(APIModel):
    """
    Schema for creating a review.

    Example request body:
    {
        "rating": 5,
        "comment": "One of the best books I've ever read"
    }
    """

    rating: NewRating = Field(
        default=None,
        description="Rating from 1 to 5 stars",
        examples=[4, 5],
    )
    comment: str | None = Field(
        default=None,
        max_length=5000,
        description="Review text",
        examples=["A chilling classic."],
    )


class ReviewUpdate(APIModel):
    """
    Schema for updating a review.

    Send only the fields to change. ``"comment": ""`` clears the comment;
    omitting ``comment`` keeps it.
    """

    rating: RatingValue = Field(default=None, description="Rating from 1 to 5 stars")
    comment: str | None = Field(default=None, max_length=5000, description="Review text")


class ReviewOut(APIModel):
    """A review as shown in a book's review list."""

    id: str
    rating: int
    comment: str
    username: str
    created_at: datetime
    updated_at: datetime | None = None


class ReviewCreatedOut(APIModel):
    id: str
    rating: int
    comment: str
    username: str
    created_at: datetime


class ReviewUpdatedOut(APIModel):
    id: str
    rating: int
    comment: str
    updated_at: datetime


class ReviewCreatedResponse(APIModel):
    message: str
    review: ReviewCreatedOut


class ReviewUpdatedResponse(APIModel):
    message: str
    review: ReviewUpdatedOut


class ReviewsPagination(APIModel):
    """Pagination metadata for the reviews on a book detail page."""

    current_page: int
    total_pages: int
    total_reviews: int
    has_next: bool
    has_prev: bool
