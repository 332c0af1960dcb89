"""
Shared schema building blocks.

Every response goes out as ``{"success": true, "data": ...}``; paginated
lists add a ``pagination`` block. Field names are camelCase on the wire and
snake_case in Python.
"""

import math
from typing import Generic, List, Optional, TypeVar

from fastapi import Query
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from utils.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class BaseRequest(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


class BaseResponse(CamelModel):
    success: bool = True


class DataResponse(BaseResponse, Generic[T]):
    data: Optional[T] = None


class MessageData(CamelModel):
    message: str


class MessageResp(BaseResponse):
    data: MessageData


# ------------------------------- Pagination ------------------------------- #

class Pagination(CamelModel):
    page: int
    page_size: int
    total_items: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def build(cls, page: int, page_size: int, total_items: int) -> "Pagination":
        total_pages = math.ceil(total_items / page_size) if page_size else 0
        return cls(
            page=page,
            page_size=page_size,
            total_items=total_items,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )


class PageParams:
    """Lenient page/pageSize parsing: bad values fall back to defaults, size is capped."""

    def __init__(self, page: Optional[str] = None, page_size: Optional[str] = None, default_size: int = DEFAULT_PAGE_SIZE):
        self.page = _positive_int(page, 1)
        self.page_size = min(_positive_int(page_size, default_size), MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def paginate(self, query):
        return query.paginate(self.page, self.page_size)

    def pagination(self, total_items: int) -> Pagination:
        return Pagination.build(self.page, self.page_size, total_items)


def _positive_int(value: Optional[str], default: int) -> int:
    try:
        parsed = int(value) if value not in (None, "") else default
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 1 else default


def parse_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def page_params(
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Items per page (max 100)"),
) -> PageParams:
    """FastAPI dependency for the standard page/pageSize query parameters."""
    return PageParams(page, page_size)
