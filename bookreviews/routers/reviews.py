"""
Reviews Router

Endpoints:
- POST /books/{book_id}/reviews - Create a review (authenticated)
- PUT /reviews/{review_id} - Update a review (owner only)
- DELETE /reviews/{review_id} - Delete a review (owner only)

Business Rules:
- One review per user per book
- Only the review author can update or delete their review
- Every change refreshes the book's averageRating/totalReviews in the
  same commit as the review itself

The rules live in ``services.ratings``; this module resolves ids, passes
the authenticated user's id and commits.
"""

from fastapi import APIRouter, Request, status

from bookreviews.config import get_settings
from bookreviews.dependencies import CurrentUser, DbSession
from bookreviews.schemas import (
    MessageResponse,
    ReviewCreate,
    ReviewCreatedOut,
    ReviewCreatedResponse,
    ReviewUpdate,
    ReviewUpdatedOut,
    ReviewUpdatedResponse,
)
from bookreviews.services import catalog, ratings
from bookreviews.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    tags=["Reviews"],
    responses={
        404: {"description": "Review or book not found"},
    },
)


@router.post(
    "/books/{book_id}/reviews",
    response_model=ReviewCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a review",
    description="Review a book. Requires authentication. One review per book per user.",
    responses={409: {"description": "Already reviewed"}},
)
@limiter.limit(settings.rate_limit_write)
def create_review(
    request: Request,
    book_id: str,
    review_data: ReviewCreate,
    db: DbSession,
    current_user: CurrentUser,
) -> ReviewCreatedResponse:
    """
    Create a new review for a book.

    Raises:
        ValidationError: 400 if book_id is malformed or rating is not 1-5
        NotFound: 404 if book not found
        Conflict: 409 if the user already reviewed this book
    """
    book = catalog.get_book(db, book_id)

    review = ratings.add_review(
        book,
        current_user.id,
        review_data.rating,
        review_data.comment,
    )
    catalog.commit_review_change(db)

    return ReviewCreatedResponse(
        message="Review added successfully",
        review=ReviewCreatedOut(
            id=review.id,
            rating=review.rating,
            comment=review.comment,
            username=current_user.username,
            created_at=review.created_at,
        ),
    )


@router.put(
    "/reviews/{review_id}",
    response_model=ReviewUpdatedResponse,
    summary="Update a review",
    description="Update your own review. Only supplied fields change.",
    responses={403: {"description": "Not the review author"}},
)
@limiter.limit(settings.rate_limit_write)
def update_review(
    request: Request,
    review_id: str,
    review_data: ReviewUpdate,
    db: DbSession,
    current_user: CurrentUser,
) -> ReviewUpdatedResponse:
    """
    Update an existing review.

    A field counts as supplied when it is present in the body;
    ``"rating": null`` is treated as not supplied, ``"comment": ""``
    clears the comment.

    Raises:
        ValidationError: 400 if review_id is malformed or rating is not 1-5
        NotFound: 404 if review not found
        Forbidden: 403 if user is not the review author
    """
    book, review_id = catalog.get_book_for_review(db, review_id)

    supplied = review_data.model_fields_set
    changes = {}
    if "rating" in supplied and review_data.rating is not None:
        changes["rating"] = review_data.rating
    if "comment" in supplied:
        changes["comment"] = review_data.comment

    review = ratings.update_review(
        book,
        review_id,
        current_user.id,
        **changes,
    )
    catalog.commit_review_change(db)

    return ReviewUpdatedResponse(
        message="Review updated successfully",
        review=ReviewUpdatedOut(
            id=review.id,
            rating=review.rating,
            comment=review.comment,
            updated_at=review.updated_at,
        ),
    )


@router.delete(
    "/reviews/{review_id}",
    response_model=MessageResponse,
    summary="Delete a review",
    description="Delete your own review.",
    responses={403: {"description": "Not the review author"}},
)
@limiter.limit(settings.rate_limit_write)
def delete_review(
    request: Request,
    review_id: str,
    db: DbSession,
    current_user: CurrentUser,
) -> MessageResponse:
    """
    Delete a review and refresh the book's rating summary.

    Raises:
        ValidationError: 400 if review_id is malformed
        NotFound: 404 if review not found
        Forbidden: 403 if user is not the review author
    """
    book, review_id = catalog.get_book_for_review(db, review_id)

    ratings.delete_review(book, review_id, current_user.id)
    catalog.commit_review_change(db)

    return MessageResponse(message="Review deleted successfully")
