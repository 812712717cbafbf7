from typing import Generic, TypeVar, List, Optional, Any
from pydantic import BaseModel, Field

from herero_dictionary.config import settings
from herero_dictionary.models import CustomModel

T = TypeVar('T')

# Keeps OFFSET and LIMIT within a signed 64-bit integer
MAX_QUERY_INT = 2**31 - 1


def parse_positive_int(value: Any, default: int) -> int:
    """
    Parse a query value as a positive integer, falling back to default
    when it is absent, non-numeric or below 1. Larger values are capped
    at MAX_QUERY_INT.
    """
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if parsed < 1:
        return default
    return min(parsed, MAX_QUERY_INT)


class PaginationParams(BaseModel):
    page: int = Field(1, ge=1, description="Page number")
    limit: int = Field(10, ge=1, description="Page size")

    @classmethod
    def from_query(cls, page: Optional[str], limit: Optional[str]) -> "PaginationParams":
        """Build params from raw query strings, clamping to MAX_PAGE_SIZE when configured"""
        size = parse_positive_int(limit, settings.DEFAULT_PAGE_SIZE)
        if settings.MAX_PAGE_SIZE:
            size = min(size, settings.MAX_PAGE_SIZE)
        return cls(page=parse_positive_int(page, 1), limit=size)


class PaginatedResponse(CustomModel, Generic[T]):
    entries: List[T]
    current_page: int
    total_pages: int
    total_entries: int


def paginate(items: List[T], total: int, page: int, size: int) -> PaginatedResponse[T]:
    """
    Create a paginated response
    """
    pages = (total + size - 1) // size  # Ceiling division

    return PaginatedResponse(
        entries=items,
        current_page=page,
        total_pages=pages,
        total_entries=total
    )

def get_offset(page: int, size: int) -> int:
    """
    Calculate offset for pagination
    """
    return (page - 1) * size
