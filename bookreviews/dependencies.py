"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Provided here:
- DbSession: Per-request database session from the app's store handle
- Pagination / ReviewPagination: Lenient page & limit query parameters
- CurrentUser: The authenticated caller, from the bearer token
"""

import re
from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bookreviews.database import get_db
from bookreviews.exceptions import Forbidden, Unauthenticated
from bookreviews.models.user import User
from bookreviews.services.accounts import get_user
from bookreviews.services.security import verify_access_token

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_books(db: Session = Depends(get_db)):
# routes write:
#   def list_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Pagination Parameters
# =============================================================================
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Largest OFFSET/LIMIT the store accepts (signed 64-bit)
MAX_SQL_INT = 2**63 - 1


def parse_int_param(raw: str | None, default: int) -> int:
    """
    Parse a page/limit query value leniently.

    Takes the leading integer of the string ("3", " 3", "3abc" -> 3).
    Absent, non-numeric, zero or negative values give ``default``, and so
    do values too large for the store to represent. There is no other
    upper bound.
    """
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if match is None:
        return default
    value = int(match.group(1))
    return value if 0 < value <= MAX_SQL_INT else default


class PaginationParams:
    """
    Common pagination parameters for list endpoints.

    Values are read as strings so that malformed input falls back to the
    defaults instead of failing the request:
        GET /books?page=2&limit=20
        GET /books?page=abc     -> page 1

    Usage in route:
        @router.get("/books")
        def list_books(db: DbSession, pagination: Pagination):
            catalog.list_books(db, page=pagination.page, limit=pagination.limit)
    """

    default_limit = 10

    def __init__(
        self,
        page: str | None = Query(
            default=None,
            description="Page number (1-indexed)",
            examples=["1", "2"],
        ),
        limit: str | None = Query(
            default=None,
            description="Number of items per page",
            examples=["10", "25"],
        ),
    ) -> None:
        self.page = parse_int_param(page, 1)
        self.limit = parse_int_param(limit, self.default_limit)
        if self.skip > MAX_SQL_INT:
            # Offset past what the store accepts falls back to the first page
            self.page = 1

    @property
    def skip(self) -> int:
        """Number of records to skip: page 1 -> 0, page 2 -> limit, ..."""
        return (self.page - 1) * self.limit


class ReviewPaginationParams(PaginationParams):
    """Pagination for the reviews embedded in a book detail response."""

    default_limit = 5


Pagination = Annotated[PaginationParams, Depends()]
ReviewPagination = Annotated[ReviewPaginationParams, Depends()]


# =============================================================================
# Bearer Authentication
# =============================================================================
# auto_error=False lets us distinguish a missing token (401) from an
# invalid one (403) instead of FastAPI's blanket 403.

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    db: DbSession,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    """
    Extract and validate the current user from the bearer token.

    This dependency:
    1. Reads the token from ``Authorization: Bearer <token>``
    2. Verifies signature, expiry and token type with the app's settings
    3. Looks up the user named by the token's ``sub`` claim

    The returned user's id is the only identity used for ownership checks;
    ids sent in request bodies are never trusted.

    Raises:
        Unauthenticated: 401 if no bearer token was sent
        Forbidden: 403 if the token is invalid, expired or for an unknown user
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Access token required")

    identity = verify_access_token(credentials.credentials, request.app.state.settings)
    if identity is None:
        raise Forbidden("Invalid or expired token")

    user = get_user(db, identity.user_id)
    if user is None:
        raise Forbidden("Invalid or expired token")

    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
