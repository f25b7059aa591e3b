"""
Identifier helpers.

Every record id is an opaque string: the 32-character hex form of a
random UUID. Clients may send any UUID spelling (with or without dashes,
upper or lower case); ``parse_id`` normalizes it before lookup.
"""

import uuid

from bookreviews.exceptions import ValidationError


def new_id() -> str:
    """Generate a fresh record id."""
    return uuid.uuid4().hex


def is_valid_id(value: object) -> bool:
    """Identifier-validity predicate applied before any lookup."""
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def parse_id(value: object, label: str = "ID") -> str:
    """
    Return the canonical form of ``value`` or raise ValidationError.

    Args:
        value: Raw identifier from the request
        label: Used in the error message, e.g. "book ID"

    Raises:
        ValidationError: If value is not a structurally valid identifier
    """
    if not is_valid_id(value):
        raise ValidationError(f"Invalid {label}")
    return uuid.UUID(value).hex
