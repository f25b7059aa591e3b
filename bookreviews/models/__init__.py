"""
SQLAlchemy Models Package

Model Relationships:
- User -> Book: One-to-Many (a user adds many books, ``Book.added_by``)
- User -> Review: One-to-Many (a user writes many reviews)
- Book -> Review: One-to-Many, owned (reviews are deleted with their book)

Import all models here to:
1. Make them available as: from bookreviews.models import Book, Review, User
2. Ensure Alembic discovers them for migrations
"""

from bookreviews.models.user import User
from bookreviews.models.book import Book
from bookreviews.models.review import Review

__all__ = [
    "User",
    "Book",
    "Review",
]
