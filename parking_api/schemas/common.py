# parking_api/schemas/common.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Generic, List, TypeVar

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """Paginated list envelope: {items, page, limit, totalPages, totalCount}."""

    model_config = ConfigDict(populate_by_name=True)

    items: List[T]
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")
    total_count: int = Field(alias="totalCount")


class MessageOut(BaseModel):
    message: str
