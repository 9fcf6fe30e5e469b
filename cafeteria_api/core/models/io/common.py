"""
Shared I/O models.

Error envelope, pagination wrapper and the partial-update base used across
every API module.
"""

from __future__ import annotations

from math import ceil
from typing import Any, ClassVar, Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, Field, model_validator

from cafeteria_api.core.constants import DEFAULT_PAGE_SIZE

ItemT = TypeVar("ItemT")

PHONE_PATTERN = r"^\+?[0-9]{8,15}$"


class ErrorResponse(BaseModel):
    """Error body returned for every handled failure."""

    detail: str = Field(description="Human-readable error message")
    code: Optional[str] = Field(default=None, description="Machine-readable error code")
    details: Optional[Any] = Field(default=None, description="Extra context (validation errors, ids)")


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str


class Page(BaseModel, Generic[ItemT]):
    """One page of a paginated listing."""

    items: List[ItemT]
    total: int = Field(ge=0, description="Total number of matching records")
    page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    pages: int = Field(ge=0, description="Number of pages at this page size")

    @classmethod
    def build(cls, items: List[ItemT], total: int, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> "Page[ItemT]":
        return cls(items=items, total=total, page=page, page_size=page_size, pages=ceil(total / page_size))


class PartialUpdate(BaseModel):
    """Base for update payloads where only the provided fields change.

    Fields named in ``required_fields`` map to NOT NULL columns: leaving them
    out keeps the stored value, sending ``null`` is a validation error.
    """

    required_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def reject_null_required_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            cleared = [name for name in cls.required_fields if name in data and data[name] is None]
            if cleared:
                raise ValueError(f"Fields cannot be null: {', '.join(cleared)}")
        return data
