from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from spendwise.schemas.common import HEX_COLOR, PatchModel, RequestModel, RowModel

CategoryType = Literal["income", "expense", "transfer"]


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class CategoryCreate(RequestModel):
    name: str = Field(min_length=1, max_length=60)
    color: str = Field(default="#3b82f6", pattern=HEX_COLOR)
    icon: str = Field(default="📁", max_length=10)
    type: CategoryType = "expense"

    @field_validator("name", mode="before")
    @classmethod
    def trim_name(cls, value):
        return _strip(value)


class CategoryUpdate(PatchModel):
    name: str | None = Field(default=None, min_length=1, max_length=60)
    color: str | None = Field(default=None, pattern=HEX_COLOR)
    icon: str | None = Field(default=None, max_length=10)
    type: CategoryType | None = None

    @field_validator("name", mode="before")
    @classmethod
    def trim_name(cls, value):
        return _strip(value)


class CategoryBrief(RowModel):
    id: int
    name: str
    color: str | None = None
    icon: str | None = None


class CategoryOut(RowModel):
    id: int
    user_id: str
    name: str
    color: str | None = None
    icon: str | None = None
    type: str
    created_at: datetime | None = None
