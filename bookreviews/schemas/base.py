"""
Shared schema configuration.

The API speaks camelCase JSON (``averageRating``, ``publishedYear``)
while Python code uses snake_case. ``APIModel`` generates camelCase
aliases, accepts either spelling on input, and FastAPI serializes
response models by alias.
"""

import math

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base for every request/response schema."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(APIModel):
    """Plain acknowledgement body."""

    message: str


def page_meta(page: int, limit: int, total: int) -> dict:
    """
    Pagination metadata shared by every paginated response.

    totalPages is ceil(total / limit), 0 for an empty result.
    """
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return {
        "current_page": page,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }
