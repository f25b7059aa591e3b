"""
Books Router

Endpoints:
- POST /books: Add a book (authenticated)
- GET /books: List books with author/genre filters and pagination
- GET /books/{book_id}: Book details with a page of its reviews

Books are immutable after creation; their rating summary changes only
through the review endpoints.
"""

from fastapi import APIRouter, Query, Request, status

from bookreviews.config import get_settings
from bookreviews.dependencies import CurrentUser, DbSession, Pagination, ReviewPagination
from bookreviews.schemas import (
    BookCreate,
    BookCreatedResponse,
    BookDetailOut,
    BookDetailResponse,
    BookListResponse,
    BookOut,
    BooksPagination,
    ReviewOut,
    ReviewsPagination,
    page_meta,
)
from bookreviews.services import catalog
from bookreviews.services.rate_limiter import limiter

settings = get_settings()

# =============================================================================
# Router Configuration
# =============================================================================

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


@router.post(
    "",
    response_model=BookCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a book",
    description="Add a new book to the catalog. Requires a bearer token.",
    responses={409: {"description": "Duplicate book (when duplicate rejection is enabled)"}},
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    book_data: BookCreate,
    db: DbSession,
    current_user: CurrentUser,
) -> BookCreatedResponse:
    """
    Add a book.

    The book starts with no reviews, ``averageRating`` 0 and
    ``totalReviews`` 0. ``addedBy`` is always the caller.
    """
    book = catalog.create_book(
        db,
        book_data,
        creator_id=current_user.id,
        reject_duplicates=request.app.state.settings.reject_duplicate_books,
    )
    return BookCreatedResponse(
        message="Book added successfully",
        book=BookOut.model_validate(book),
    )


@router.get(
    "",
    response_model=BookListResponse,
    summary="List books",
    description="Paginated list of books, newest first, optionally filtered by author and genre.",
)
@limiter.limit(settings.rate_limit_default)
def list_books(
    request: Request,
    db: DbSession,
    pagination: Pagination,
    author: str | None = Query(default=None, description="Author contains (case-insensitive)"),
    genre: str | None = Query(default=None, description="Genre contains (case-insensitive)"),
) -> BookListResponse:
    """
    List books with pagination and optional filtering.

    Examples:
        GET /books?author=orwell
        GET /books?genre=fiction&page=2&limit=5
    """
    books, total = catalog.list_books(
        db,
        author=author,
        genre=genre,
        page=pagination.page,
        limit=pagination.limit,
    )
    return BookListResponse(
        books=[BookOut.model_validate(book) for book in books],
        pagination=BooksPagination(
            total_books=total,
            **page_meta(pagination.page, pagination.limit, total),
        ),
    )


@router.get(
    "/{book_id}",
    response_model=BookDetailResponse,
    summary="Get a book by ID",
    description="Book details with a page of its reviews (5 per page by default).",
    responses={400: {"description": "Invalid book ID"}},
)
@limiter.limit(settings.rate_limit_default)
def get_book(
    request: Request,
    book_id: str,
    db: DbSession,
    pagination: ReviewPagination,
) -> BookDetailResponse:
    """
    Get a single book and one page of its reviews, oldest first.

    Raises:
        ValidationError: 400 if book_id is malformed
        NotFound: 404 if the book does not exist
    """
    book = catalog.get_book(db, book_id)
    rows = catalog.list_book_reviews(db, book, pagination.page, pagination.limit)

    return BookDetailResponse(
        book=BookDetailOut.model_validate(book),
        reviews=[
            ReviewOut(
                id=review.id,
                rating=review.rating,
                comment=review.comment,
                username=username,
                created_at=review.created_at,
                updated_at=review.updated_at,
            )
            for review, username in rows
        ],
        reviews_pagination=ReviewsPagination(
            total_reviews=book.total_reviews,
            **page_meta(pagination.page, pagination.limit, book.total_reviews),
        ),
    )
