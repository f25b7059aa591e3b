"""
Ratings Service

The review aggregation engine. Every review mutation goes through here so
the denormalized rating summary on Book stays in sync with its reviews:

- average_rating: The mean of all review ratings, rounded to one decimal
- total_reviews: Number of reviews

Each operation receives an already-loaded Book and the id of the
authenticated caller, validates, mutates the ORM objects in memory and
recomputes the summary. Nothing is committed here: the router commits the
review change and the summary together (see ``catalog.commit_review_change``).

Rounding
========
The mean is computed exactly with Decimal and rounded half-up to one
decimal place: 4.25 -> 4.3, 4.45 -> 4.5, 2.75 -> 2.8. Float rounding would
make ties depend on binary representation.
"""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from bookreviews.exceptions import Conflict, Forbidden, NotFound, ValidationError
from bookreviews.models.book import Book
from bookreviews.models.review import Review
from bookreviews.utils.identifiers import new_id

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5

_ONE_DECIMAL = Decimal("0.1")


class _Unset:
    """Marker for "field not supplied" in partial updates."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def _utcnow() -> datetime:
    return datetime.now(UTC)


def validate_rating(value: Any, message: str = "Rating must be between 1 and 5") -> int:
    """
    Check that value is an integer rating in [1, 5].

    Booleans are rejected even though ``bool`` subclasses ``int``.

    Raises:
        ValidationError: For missing, non-integer or out-of-range values
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(message)
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(message)
    return value


def recompute_average(reviews: Iterable[Review]) -> float:
    """
    Average rating of ``reviews`` rounded half-up to one decimal.

    Returns 0.0 for an empty collection. This is the only place the
    average is computed.
    """
    ratings = [review.rating for review in reviews]
    if not ratings:
        return 0.0
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def refresh_rating_summary(book: Book) -> None:
    """Recalculate ``total_reviews`` and ``average_rating`` from book.reviews."""
    book.total_reviews = len(book.reviews)
    book.average_rating = recompute_average(book.reviews.values())


def find_review_by_user(book: Book, user_id: str) -> Review | None:
    """Return the caller's review on this book, if any."""
    for review in book.reviews.values():
        if review.user_id == user_id:
            return review
    return None


def _get_owned_review(book: Book, review_id: str, caller_id: str, action: str) -> Review:
    review = book.reviews.get(review_id)
    if review is None:
        raise NotFound("Review not found")
    if review.user_id != caller_id:
        logger.warning(
            f"User {caller_id} tried to {action} review {review_id} owned by {review.user_id}"
        )
        raise Forbidden(f"You can only {action} your own reviews")
    return review


def add_review(book: Book, caller_id: str, rating: Any, comment: str | None = None) -> Review:
    """
    Add the caller's review to a book.

    Args:
        book: Book to review (already loaded)
        caller_id: Authenticated user id
        rating: Integer 1-5
        comment: Optional text, stored as "" when omitted

    Returns:
        The new Review (pending until the session commits)

    Raises:
        ValidationError: If rating is missing or outside 1-5
        Conflict: If the caller already reviewed this book
    """
    rating = validate_rating(rating, "Rating is required and must be between 1 and 5")

    if find_review_by_user(book, caller_id) is not None:
        raise Conflict("You have already reviewed this book")

    review = Review(
        id=new_id(),
        user_id=caller_id,
        rating=rating,
        comment=comment or "",
        created_at=_utcnow(),
    )
    book.reviews[review.id] = review
    refresh_rating_summary(book)

    logger.info(
        f"Review {review.id} added to book {book.id}: "
        f"average={book.average_rating}, total={book.total_reviews}"
    )
    return review


def update_review(
    book: Book,
    review_id: str,
    caller_id: str,
    rating: Any = UNSET,
    comment: Any = UNSET,
) -> Review:
    """
    Apply a partial update to the caller's review.

    Only supplied fields change; ``comment=""`` clears the comment while
    leaving ``comment`` as UNSET keeps it. The average is recomputed when
    the rating changes; ``total_reviews`` never changes here.

    Raises:
        NotFound: If the review is not part of this book
        Forbidden: If the caller is not the review's author
        ValidationError: If a supplied rating is outside 1-5
    """
    review = _get_owned_review(book, review_id, caller_id, "update")

    if rating is not UNSET:
        rating = validate_rating(rating)
    if comment is not UNSET and comment is None:
        comment = ""

    rating_changed = rating is not UNSET and rating != review.rating
    if rating is not UNSET:
        review.rating = rating
    if comment is not UNSET:
        review.comment = comment
    review.updated_at = _utcnow()

    if rating_changed:
        refresh_rating_summary(book)
        logger.info(f"Review {review.id} re-rated: book {book.id} average={book.average_rating}")

    return review


def delete_review(book: Book, review_id: str, caller_id: str) -> None:
    """
    Remove the caller's review from a book and refresh the summary.

    Raises:
        NotFound: If the review is not part of this book
        Forbidden: If the caller is not the review's author
    """
    review = _get_owned_review(book, review_id, caller_id, "delete")

    del book.reviews[review.id]
    refresh_rating_summary(book)

    logger.info(
        f"Review {review_id} deleted from book {book.id}: "
        f"average={book.average_rating}, total={book.total_reviews}"
    )
