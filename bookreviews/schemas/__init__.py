"""
Pydantic Schemas Package

Request/response validation models, kept separate from the SQLAlchemy
models so the API controls exactly what is exposed.

Naming Convention:
- XxxCreate / XxxUpdate / XxxRequest: Request bodies
- XxxOut / XxxPublic: Objects embedded in responses
- XxxResponse: Full response bodies
"""

from bookreviews.schemas.base import APIModel, MessageResponse, page_meta
from bookreviews.schemas.book import (
    BookCreate,
    BookCreatedResponse,
    BookDetailOut,
    BookDetailResponse,
    BookListResponse,
    BookOut,
    BooksPagination,
    SearchPagination,
    SearchResponse,
)
from bookreviews.schemas.review import (
    ReviewCreate,
    ReviewCreatedOut,
    ReviewCreatedResponse,
    ReviewOut,
    ReviewsPagination,
    ReviewUpdate,
    ReviewUpdatedOut,
    ReviewUpdatedResponse,
)
from bookreviews.schemas.user import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    UserPublic,
)

__all__ = [
    "APIModel",
    "MessageResponse",
    "page_meta",
    # Book schemas
    "BookCreate",
    "BookOut",
    "BookDetailOut",
    "BookCreatedResponse",
    "BooksPagination",
    "BookListResponse",
    "BookDetailResponse",
    "SearchPagination",
    "SearchResponse",
    # Review schemas
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewOut",
    "ReviewCreatedOut",
    "ReviewUpdatedOut",
    "ReviewCreatedResponse",
    "ReviewUpdatedResponse",
    "ReviewsPagination",
    # User/Auth schemas
    "SignupRequest",
    "LoginRequest",
    "UserPublic",
    "AuthResponse",
]
