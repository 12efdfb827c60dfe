"""Common response models."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Record(BaseModel):
    """Base for API records. Unknown fields are kept so nothing is dropped on output."""

    model_config = ConfigDict(extra="allow")


class PageMeta(BaseModel):
    """Pagination metadata from the Langfuse API."""

    page: int | None = None
    limit: int | None = None
    totalItems: int | None = None
    totalPages: int | None = None


class Page(BaseModel, Generic[T]):
    """Paginated API response envelope.

    Format: ``{"data": [...], "meta": {"page", "limit", "totalItems", "totalPages"}}``
    """

    data: list[T] = Field(default_factory=list)
    meta: PageMeta | None = None
