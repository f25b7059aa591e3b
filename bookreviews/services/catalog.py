"""
Catalog Service

Book store access and the query/search layer:

- create_book: Validate and insert a book with an empty rating summary
- get_book / get_book_for_review: Resolve ids to loaded books
- list_books: Filter by author/genre, newest first
- search_books: Match title OR author, best rated first
- list_book_reviews: One page of a book's reviews with usernames
- commit_review_change: Commit a review mutation and its summary together

Text Matching
=============
Filters and search are case-insensitive *literal* substring matches.
``contains(..., autoescape=True)`` escapes LIKE wildcards, so a query such
as "100%" matches the characters and not a pattern.
"""

import logging
from collections.abc import Sequence

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from bookreviews.exceptions import Conflict, NotFound
from bookreviews.models.book import Book
from bookreviews.models.review import Review
from bookreviews.models.user import User
from bookreviews.schemas.book import BookCreate
from bookreviews.utils.identifiers import parse_id

logger = logging.getLogger(__name__)

UNKNOWN_USERNAME = "Unknown User"


# =============================================================================
# Book Store
# =============================================================================


def create_book(
    db: Session,
    data: BookCreate,
    creator_id: str,
    reject_duplicates: bool = False,
) -> Book:
    """
    Create a new book with an empty review set.

    Args:
        db: Database session
        data: Validated book fields (title/author/genre already non-blank)
        creator_id: Authenticated user adding the book
        reject_duplicates: Refuse an exact case-insensitive (title, author)
            match with an existing book

    Returns:
        The committed Book

    Raises:
        Conflict: If reject_duplicates is set and the book already exists
    """
    if reject_duplicates:
        stmt = select(Book.id).where(
            func.lower(Book.title) == data.title.lower(),
            func.lower(Book.author) == data.author.lower(),
        )
        if db.execute(stmt).first() is not None:
            raise Conflict("Book with this title and author already exists")

    book = Book(
        title=data.title,
        author=data.author,
        genre=data.genre,
        description=data.description or "",
        published_year=data.published_year,
        added_by=creator_id,
        average_rating=0.0,
        total_reviews=0,
    )
    db.add(book)
    db.commit()
    db.refresh(book)

    logger.info(f"Book added: {book.id} '{book.title}' by user {creator_id}")
    return book


def get_book(db: Session, book_id: str) -> Book:
    """
    Get a book by id.

    Raises:
        ValidationError: If book_id is not a valid identifier
        NotFound: If no such book exists
    """
    book = db.get(Book, parse_id(book_id, "book ID"))
    if book is None:
        raise NotFound("Book not found")
    return book


def get_book_for_review(db: Session, review_id: str) -> tuple[Book, str]:
    """
    Get the book that owns a review.

    Returns:
        (book, canonical review id)

    Raises:
        ValidationError: If review_id is not a valid identifier
        NotFound: If no such review exists
    """
    review_id = parse_id(review_id, "review ID")
    stmt = select(Review.book_id).where(Review.id == review_id)
    book_id = db.execute(stmt).scalar_one_or_none()
    if book_id is None:
        raise NotFound("Review not found")

    book = db.get(Book, book_id)
    if book is None:
        raise NotFound("Review not found")
    return book, review_id


def commit_review_change(db: Session) -> None:
    """
    Commit a review mutation together with the book's rating summary.

    Concurrent writers on the same book are detected rather than silently
    overwriting each other:
    - StaleDataError: another request changed the book's summary after we
      read it (optimistic version check)
    - IntegrityError: another request inserted this user's review first

    Raises:
        Conflict: For either case, after rolling back
    """
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        logger.warning("Concurrent review change detected, rolled back")
        raise Conflict("Book was modified by another request, please retry") from None
    except IntegrityError:
        db.rollback()
        logger.warning("Duplicate review insert rejected by the database")
        raise Conflict("You have already reviewed this book") from None


# =============================================================================
# Query / Search Layer
# =============================================================================


def _contains(column, value: str):
    return func.lower(column).contains(value.lower(), autoescape=True)


def _page(db: Session, stmt: Select, page: int, limit: int) -> tuple[Sequence[Book], int]:
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = db.execute(count_stmt).scalar() or 0

    books = db.execute(stmt.offset((page - 1) * limit).limit(limit)).scalars().all()
    return books, total


def list_books(
    db: Session,
    author: str | None = None,
    genre: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[Sequence[Book], int]:
    """
    List books, newest first, optionally filtered.

    Args:
        author: Case-insensitive substring of the author
        genre: Case-insensitive substring of the genre
        page: 1-indexed page number
        limit: Page size

    Returns:
        (books on this page, total matching books)
    """
    stmt = select(Book)
    if author:
        stmt = stmt.where(_contains(Book.author, author))
    if genre:
        stmt = stmt.where(_contains(Book.genre, genre))

    stmt = stmt.order_by(Book.created_at.desc(), Book.id)
    return _page(db, stmt, page, limit)


def search_books(
    db: Session,
    q: str,
    page: int = 1,
    limit: int = 10,
) -> tuple[Sequence[Book], int]:
    """
    Search books whose title or author contains ``q`` (case-insensitive).

    Results surface well-reviewed books first: ordered by average rating,
    then review count, both descending; newest first among equals.

    Returns:
        (books on this page, total matching books)
    """
    stmt = (
        select(Book)
        .where(or_(_contains(Book.title, q), _contains(Book.author, q)))
        .order_by(
            Book.average_rating.desc(),
            Book.total_reviews.desc(),
            Book.created_at.desc(),
            Book.id,
        )
    )
    return _page(db, stmt, page, limit)


def list_book_reviews(
    db: Session,
    book: Book,
    page: int = 1,
    limit: int = 5,
) -> list[tuple[Review, str]]:
    """
    One page of a book's reviews, oldest first, with author usernames.

    Returns:
        List of (review, username); username is "Unknown User" when the
        author record is missing
    """
    stmt = (
        select(Review, User.username)
        .outerjoin(User, Review.user_id == User.id)
        .where(Review.book_id == book.id)
        .order_by(Review.created_at, Review.id)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return [
        (review, username or UNKNOWN_USERNAME)
        for review, username in db.execute(stmt).all()
    ]
