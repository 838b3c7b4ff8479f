"""
===============================================================================
MODULE: Page-number pagination
===============================================================================

Responsibilities:
  - Clamp page/limit to sane bounds and turn them into an OFFSET.
  - Build the `pagination` block of list responses
    ({page, limit, total, totalPages}).
===============================================================================
"""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_PAGE_SIZE: Final[int] = 20
MAX_PAGE_SIZE: Final[int] = 100


class PageInfo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int = Field(description="1-based page number")
    limit: int = Field(description="Items per page")
    total: int = Field(description="Items matching the query")
    total_pages: int = Field(description="ceil(total / limit)")


def clamp_page(page: int, limit: int) -> tuple[int, int]:
    return max(1, int(page)), min(MAX_PAGE_SIZE, max(1, int(limit)))


def page_offset(page: int, limit: int) -> int:
    page, limit = clamp_page(page, limit)
    return (page - 1) * limit


def build_page_info(*, page: int, limit: int, total: int) -> PageInfo:
    page, limit = clamp_page(page, limit)
    return PageInfo(
        page=page,
        limit=limit,
        total=total,
        total_pages=-(-total // limit),
    )
