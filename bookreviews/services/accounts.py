"""
Accounts Service

The credential store: registering users and checking login credentials.

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Login failures return the same message for unknown email and wrong
  password so accounts can't be enumerated
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookreviews.exceptions import Conflict, Unauthenticated, ValidationError
from bookreviews.models.user import User
from bookreviews.services.security import hash_password, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def get_user(db: Session, user_id: str) -> User | None:
    """Look up a user by id."""
    return db.get(User, user_id)


def register_user(db: Session, username: str, email: str, password: str) -> User:
    """
    Create a new account.

    Args:
        db: Database session
        username: Unique display name
        email: Unique login email
        password: Plain password (hashed before storage)

    Returns:
        The committed User

    Raises:
        ValidationError: If the password is too short
        Conflict: If the email or username is already registered
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    stmt = select(User).where(or_(User.email == email, User.username == username))
    if db.execute(stmt).first() is not None:
        raise Conflict("User already exists")

    user = User(
        username=username,
        email=email,
        hashed_password=hash_password(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email/username
        db.rollback()
        raise Conflict("User already exists") from None
    db.refresh(user)

    logger.info(f"New user registered: {user.email}")
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """
    Check login credentials.

    Raises:
        Unauthenticated: If the email is unknown or the password is wrong
    """
    user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()

    if user is None:
        logger.warning(f"Login failed: user not found for {email}")
        raise Unauthenticated("Invalid credentials")

    if not verify_password(password, user.hashed_password):
        logger.warning(f"Login failed: incorrect password for {email}")
        raise Unauthenticated("Invalid credentials")

    logger.info(f"User logged in: {user.email}")
    return user
