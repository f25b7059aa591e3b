"""
pytest Fixtures for Book Reviews API Tests

Shared fixtures used across all test files.

FIXTURE LAYOUT:
===============
- database: A fresh in-memory SQLite store per test (StaticPool keeps the
  single connection alive, so every session sees the same data)
- app / client: An application built around that store
- db_session: A session on the same store, for service-level tests
- register / alice / bob: Accounts created through /signup
- create_book / sample_book: Books created through POST /books

Each test gets its own database, so nothing leaks between tests and
commits behave exactly as in production.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app.
# This disables rate limiting and sets a test secret key.
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"

from collections.abc import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from bookreviews.database import Database
from bookreviews.main import create_app

# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def database() -> Generator[Database, None, None]:
    """
    Create an isolated in-memory database with all tables.

    StaticPool hands out one connection for the whole test; without it
    every new connection would see an empty in-memory database.
    """
    database = Database("sqlite://", poolclass=StaticPool)
    database.create_tables()

    yield database

    database.dispose()


@pytest.fixture
def db_session(database: Database) -> Generator[Session, None, None]:
    """Session for tests that call services directly."""
    with database.session() as session:
        yield session


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================


@pytest.fixture
def app(database: Database) -> FastAPI:
    """Application wired to the test database."""
    return create_app(database=database)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    HTTP client for the test application.

    Using it as a context manager runs the lifespan (startup/shutdown).
    """
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


def auth_header(token: str) -> dict:
    """Authorization header for a bearer token."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client: TestClient) -> Callable[..., dict]:
    """
    Factory that signs up a user and returns its id, username, token and
    ready-to-use headers.
    """

    def _register(username: str, email: str | None = None, password: str = "password123") -> dict:
        response = client.post(
            "/signup",
            json={
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {
            "id": body["user"]["id"],
            "username": body["user"]["username"],
            "email": body["user"]["email"],
            "token": body["token"],
            "headers": auth_header(body["token"]),
        }

    return _register


@pytest.fixture
def alice(register) -> dict:
    return register("alice")


@pytest.fixture
def bob(register) -> dict:
    return register("bob")


@pytest.fixture
def create_book(client: TestClient, alice: dict) -> Callable[..., dict]:
    """Factory that adds a book through the API (as alice by default)."""

    def _create_book(
        title: str = "1984",
        author: str = "George Orwell",
        genre: str = "Dystopian Fiction",
        user: dict | None = None,
        **extra,
    ) -> dict:
        payload = {"title": title, "author": author, "genre": genre, **extra}
        response = client.post("/books", json=payload, headers=(user or alice)["headers"])
        assert response.status_code == 201, response.text
        return response.json()["book"]

    return _create_book


@pytest.fixture
def sample_book(create_book) -> dict:
    """A single book: 1984 by George Orwell."""
    return create_book(description="A dystopian novel", publishedYear=1949)
