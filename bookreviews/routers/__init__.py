"""
API Routers Package

Router Structure:
- auth.py: /signup, /login
- books.py: /books, /books/{book_id}
- reviews.py: /books/{book_id}/reviews, /reviews/{review_id}
- search.py: /search

Each router is imported and registered in main.py.
"""

from bookreviews.routers.auth import router as auth_router
from bookreviews.routers.books import router as books_router
from bookreviews.routers.reviews import router as reviews_router
from bookreviews.routers.search import router as search_router

__all__ = [
    "auth_router",
    "books_router",
    "reviews_router",
    "search_router",
]
