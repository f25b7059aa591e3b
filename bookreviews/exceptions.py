"""
Application Exceptions

Services raise these instead of HTTPException so the same code can be
used from routers, scripts and tests. ``main.create_app`` registers a
handler that renders every subclass as ``{"error": message}`` with the
matching status code.

Taxonomy:
- ValidationError: malformed or missing input (400)
- Unauthenticated: missing credential or bad login (401)
- Forbidden: valid credential, not allowed (403)
- NotFound: well-formed reference, absent resource (404)
- Conflict: duplicate user, review or book (409)
- InternalError: unexpected failure (500)
"""

from fastapi import status


class BookReviewsError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BookReviewsError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthenticated(BookReviewsError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access token required"


class Forbidden(BookReviewsError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(BookReviewsError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(BookReviewsError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InternalError(BookReviewsError):
    pass
