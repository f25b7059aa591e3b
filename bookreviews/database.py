"""
Database Module

This module sets up SQLAlchemy 2.0 for the Book Reviews API.

Store Handle
============
There is no module-level engine. A ``Database`` object owns the engine and
the session factory and is created explicitly:

1. ``create_app()`` builds a Database from settings (or receives one)
2. The handle is stored on ``app.state.database``
3. The lifespan creates tables on startup and disposes the engine on shutdown
4. ``get_db`` opens one session per request from the request's app

Tests and scripts construct their own Database against any URL, which keeps
every component free of ambient connection state.

Session Management Pattern
==========================
"Session per request":
1. Request arrives -> create a new session
2. Use the session for all database operations in that request
3. Commit on success (in the router)
4. Close the session when the request ends
"""

import logging
from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookreviews.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses ``Base.metadata`` to discover tables for migrations.
    """
    pass


class Database:
    """
    Explicit store handle: engine + session factory with a lifecycle.

    Usage:
        database = Database("sqlite:///./bookreviews.db")
        database.create_tables()

        with database.session() as db:
            ...

        database.dispose()
    """

    def __init__(self, url: str, **engine_options: Any) -> None:
        if url.startswith("sqlite"):
            # SQLite connections are used from FastAPI's threadpool
            connect_args = engine_options.pop("connect_args", {})
            connect_args.setdefault("check_same_thread", False)
            engine_options["connect_args"] = connect_args

        self.url = url
        self.engine: Engine = create_engine(url, **engine_options)
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a Database using the pool options from settings."""
        options: dict[str, Any] = {"echo": settings.debug}
        if not settings.is_sqlite:
            options.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=True,
            )
        return cls(settings.database_url, **options)

    def session(self) -> Session:
        """Open a new session. Callers own closing it (or use ``with``)."""
        return self.session_factory()

    def create_tables(self) -> None:
        """
        Create all tables that don't exist yet.

        Convenient for development and tests; production deployments
        should run ``alembic upgrade head`` instead.
        """
        # Import models so their tables are registered on Base.metadata
        import bookreviews.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all tables. Deletes all data; tests only."""
        import bookreviews.models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> bool:
        """Return True if a trivial query succeeds."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception as exc:
            logger.warning(f"Database ping failed: {exc}")
            return False

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()

    def __repr__(self) -> str:
        return f"Database(url='{self.engine.url.render_as_string(hide_password=True)}')"


# =============================================================================
# Dependency Injection
# =============================================================================
def get_database(request: Request) -> Database:
    """Return the store handle attached to the running application."""
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, code after yield closes it,
    even if the route raised.

    Usage in Routes:
        @router.get("/books")
        def list_books(db: DbSession):
            ...
    """
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
