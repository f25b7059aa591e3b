"""
Search Router

Free-text search over book titles and authors. Results are ordered so
well-reviewed books surface first.
"""

from fastapi import APIRouter, Query, Request

from bookreviews.config import get_settings
from bookreviews.dependencies import DbSession, Pagination
from bookreviews.exceptions import ValidationError
from bookreviews.schemas import BookOut, SearchPagination, SearchResponse, page_meta
from bookreviews.services import catalog
from bookreviews.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/search",
    tags=["Search"],
)


@router.get(
    "",
    response_model=SearchResponse,
    summary="Search books",
    description="""
    Case-insensitive search on title OR author.

    Results are sorted by average rating, then review count (both
    descending).

    Example: `GET /search?q=gatsby&page=1&limit=10`
    """,
    responses={400: {"description": "Search query is required"}},
)
@limiter.limit(settings.rate_limit_default)
def search(
    request: Request,
    db: DbSession,
    pagination: Pagination,
    q: str | None = Query(default=None, description="Text to look for in title or author"),
) -> SearchResponse:
    """
    Search books by title or author.

    Raises:
        ValidationError: 400 if q is missing or blank
    """
    query = (q or "").strip()
    if not query:
        raise ValidationError("Search query is required")

    books, total = catalog.search_books(db, query, pagination.page, pagination.limit)

    return SearchResponse(
        query=query,
        books=[BookOut.model_validate(book) for book in books],
        pagination=SearchPagination(
            total_results=total,
            **page_meta(pagination.page, pagination.limit, total),
        ),
    )
