#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample users, books and reviews for
development.

USAGE:
    # From the project root with the package installed
    python scripts/seed_data.py

    # Keep existing rows
    python scripts/seed_data.py --keep

Everything goes through the same services the API uses, so the seeded
books carry correct averageRating/totalReviews values.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from bookreviews.config import get_settings
from bookreviews.database import Database
from bookreviews.models import Book, Review, User
from bookreviews.schemas import BookCreate
from bookreviews.services import catalog, ratings
from bookreviews.services.accounts import register_user

USERS = [
    ("alice", "alice@example.com", "password123"),
    ("bob", "bob@example.com", "password123"),
    ("carol", "carol@example.com", "password123"),
]

BOOKS = [
    {
        "title": "1984",
        "author": "George Orwell",
        "genre": "Dystopian Fiction",
        "description": "A dystopian social science fiction novel and cautionary tale.",
        "published_year": 1949,
    },
    {
        "title": "Animal Farm",
        "author": "George Orwell",
        "genre": "Political Satire",
        "description": "A beast fable about the Russian Revolution.",
        "published_year": 1945,
    },
    {
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "genre": "Classic Fiction",
        "description": "Jay Gatsby's pursuit of Daisy Buchanan on Long Island.",
        "published_year": 1925,
    },
    {
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "genre": "Romance",
        "description": "Elizabeth Bennet and Mr. Darcy.",
        "published_year": 1813,
    },
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "genre": "Science Fiction",
        "description": "Politics, religion and ecology on the desert planet Arrakis.",
        "published_year": 1965,
    },
]

# (book title, username, rating, comment)
REVIEWS = [
    ("1984", "alice", 5, "Chilling and still relevant."),
    ("1984", "bob", 3, "Bleak, but important."),
    ("The Great Gatsby", "alice", 4, "Beautiful prose."),
    ("The Great Gatsby", "carol", 5, ""),
    ("Dune", "bob", 5, "The best science fiction world ever built."),
    ("Dune", "carol", 4, "Slow start, huge payoff."),
    ("Pride and Prejudice", "carol", 4, "Witty and warm."),
]


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(Review))
    db.execute(delete(Book))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def create_users(db: Session) -> dict[str, User]:
    print("Creating users...")
    users = {
        username: register_user(db, username, email, password)
        for username, email, password in USERS
    }
    print(f"Created {len(users)} users.")
    return users


def create_books(db: Session, users: dict[str, User]) -> dict[str, Book]:
    print("Creating books...")
    creator = users["alice"]
    books = {
        data["title"]: catalog.create_book(db, BookCreate(**data), creator.id)
        for data in BOOKS
    }
    print(f"Created {len(books)} books.")
    return books


def create_reviews(db: Session, users: dict[str, User], books: dict[str, Book]) -> int:
    print("Creating reviews...")
    for title, username, rating, comment in REVIEWS:
        ratings.add_review(books[title], users[username].id, rating, comment)
        catalog.commit_review_change(db)
    print(f"Created {len(REVIEWS)} reviews.")
    return len(REVIEWS)


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    settings = get_settings()
    database = Database.from_settings(settings)
    database.create_tables()

    db = database.session()
    try:
        if clear_existing:
            clear_data(db)

        users = create_users(db)
        books = create_books(db, users)
        review_count = create_reviews(db, users, books)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Users: {len(users)}")
        print(f"  - Books: {len(books)}")
        print(f"  - Reviews: {review_count}")
        for book in books.values():
            print(f"    {book.title}: {book.average_rating} ({book.total_reviews} reviews)")
        print(f"\nAPI documentation at http://localhost:{settings.port}/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    seed_database(clear_existing="--keep" not in sys.argv[1:])
