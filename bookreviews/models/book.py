"""
Book Model

The central model of the API. A book owns its reviews and carries a
cached rating summary derived from them.

Rating Summary
==============
``average_rating`` and ``total_reviews`` are denormalized from the review
set so listings and search can sort on them without aggregating. They are
written only by ``bookreviews.services.ratings``, which keeps:

    total_reviews == len(reviews)
    average_rating == recompute_average(reviews.values())   # 0 when empty

Reviews Collection
==================
``reviews`` is a dict keyed by review id (``attribute_keyed_dict``) so
update/delete find a review in O(1). The relationship is loaded ordered by
creation time, and Python dicts keep insertion order, so iterating
``book.reviews.values()`` lists reviews oldest first.

Optimistic Concurrency
======================
``version`` is SQLAlchemy's version counter. Every UPDATE of a book row
checks the version it was read with; if another request wrote the summary
in between, the flush raises ``StaleDataError`` instead of silently
overwriting a newer summary.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, attribute_keyed_dict, mapped_column, relationship

from bookreviews.database import Base
from bookreviews.utils.identifiers import new_id

if TYPE_CHECKING:
    from bookreviews.models.review import Review
    from bookreviews.models.user import User


class Book(Base):
    """
    Book model representing books in the catalog.

    Table: books

    Fields:
    - title, author, genre: Required, immutable after creation
    - description: Optional summary (empty string when not given)
    - published_year: Optional year of publication
    - added_by: User who created the book
    - average_rating / total_reviews: Cached rating summary

    Indexes:
    - title, author, genre: Filtering and search
    - average_rating, total_reviews: Search ordering

    Example:
        book = Book(
            title="1984",
            author="George Orwell",
            genre="Dystopian Fiction",
            added_by=user.id,
        )
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Author name as entered"
    )

    genre: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Free-form genre label"
    )

    description: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
        comment="Book description or summary"
    )

    published_year: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Year of publication"
    )

    added_by: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="User who added the book"
    )

    # -------------------------------------------------------------------------
    # Rating Summary (maintained by services.ratings)
    # -------------------------------------------------------------------------
    average_rating: Mapped[float] = mapped_column(
        Float,
        default=0.0,
        nullable=False,
        index=True,
        comment="Mean review rating rounded to one decimal, 0 with no reviews"
    )

    total_reviews: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        index=True,
        comment="Number of reviews for this book"
    )

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Optimistic concurrency counter"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    # Python-side default: "newest first" ordering needs sub-second precision
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
        index=True,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    reviews: Mapped[dict[str, "Review"]] = relationship(
        "Review",
        back_populates="book",
        collection_class=attribute_keyed_dict("id"),
        cascade="all, delete-orphan",
        order_by="Review.created_at",
    )

    creator: Mapped["User"] = relationship("User")

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', author='{self.author}')"
